"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .exhaustive_solver import ExhaustiveSolver
from .heuristic_solver import HeuristicSolver
from .deductive_solver import DeductiveSolver
from .techniques import (
    solve_basic,
    solve_box_locked_candidates,
    solve_line_locked_candidates,
    solve_x_wing_and_skyscraper,
    propagate,
    has_contradiction,
)

__all__ = [
    "BaseSolver",
    "SolverStats",
    "ExhaustiveSolver",
    "HeuristicSolver",
    "DeductiveSolver",
    "solve_basic",
    "solve_box_locked_candidates",
    "solve_line_locked_candidates",
    "solve_x_wing_and_skyscraper",
    "propagate",
    "has_contradiction",
]

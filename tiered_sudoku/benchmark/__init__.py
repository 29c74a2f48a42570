"""Benchmark module for comparing Sudoku solvers."""

from .benchmark import Benchmark, BenchmarkResult, default_solvers
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "Visualizer", "default_solvers"]

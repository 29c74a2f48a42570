"""Sudoku puzzle generator driven by the technique tier a puzzle needs."""

from __future__ import annotations
import logging
import os
import random
from typing import List, Tuple, Optional

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..core.difficulty import Difficulty
from ..exceptions import GenerationExhaustedError, SolverTimeoutError, SudokuError
from ..solvers.base_solver import DEFAULT_TIME_LIMIT_MS
from ..solvers.deductive_solver import DeductiveSolver
from ..solvers.heuristic_solver import HeuristicSolver

log = logging.getLogger(__name__)

INITIAL_CLUES = 17


class SudokuGenerator:
    """
    Generator for Sudoku puzzles graded by the techniques they need.

    Algorithm:
    1. Place 17 random clues on an empty board and complete them with the
       heuristic solver. Boards without a completion are thrown away.
    2. Visit every cell in a shuffled row and column order and clear it, as
       long as the deductive solver at the target tier still solves the
       reduced puzzle.
    3. Accept the result only if it has a unique solution and the techniques
       it needed put it exactly at the target tier. Otherwise start over.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        max_attempts: Optional[int] = 100,
    ):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            time_limit_ms: Time budget of every solver run.
            max_attempts: Candidates to try per puzzle before giving up with
                GenerationExhaustedError. None retries forever.
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.size = SudokuBoard.SIZE
        self.seed = seed
        self.time_limit_ms = time_limit_ms
        self.max_attempts = max_attempts
        self.random = random.Random(seed)
        self.attempts = 0
        self._generated = 0

    def generate(self, difficulty: Difficulty = Difficulty.NORMAL) -> SudokuBoard:
        """
        Generate a Sudoku puzzle with the specified difficulty.

        Args:
            difficulty: Desired difficulty level.

        Returns:
            The puzzle, with its filled grid attached as ``solution``.

        Raises:
            GenerationExhaustedError: No candidate was accepted within
                ``max_attempts`` tries.
        """
        self.attempts = 0
        while self.max_attempts is None or self.attempts < self.max_attempts:
            self.attempts += 1
            solution = self._complete(self._random_clues())
            if solution is None:
                log.debug("Attempt %d: initial clues have no completion", self.attempts)
                continue

            puzzle = self._reduce(solution, difficulty)

            if self._accept(puzzle, difficulty):
                self._generated += 1
                puzzle.puzzle_id = f"{difficulty.value}-{self._generated}"
                solution.puzzle_id = puzzle.puzzle_id
                puzzle.solution = solution
                log.info("Generated %s puzzle with %d clues after %d attempt(s)",
                         difficulty.label, puzzle.count_filled(), self.attempts)
                return puzzle

            log.debug("Attempt %d rejected (%d clues)", self.attempts, puzzle.count_filled())

        raise GenerationExhaustedError(
            f"No {difficulty.label} puzzle accepted after {self.attempts} attempts"
        )

    def generate_batch(
        self,
        count: int,
        difficulty: Difficulty = Difficulty.NORMAL,
        show_progress: bool = False,
    ) -> List[SudokuBoard]:
        """
        Generate multiple puzzles of the same difficulty.

        Args:
            count: Number of puzzles to generate.
            difficulty: Desired difficulty level.
            show_progress: Display a progress bar.

        Returns:
            List of SudokuBoard puzzles.
        """
        return [
            self.generate(difficulty)
            for _ in tqdm(range(count), desc=f"Generating {difficulty.label}",
                          disable=not show_progress)
        ]

    def generate_with_solution(
        self, difficulty: Difficulty = Difficulty.NORMAL
    ) -> Tuple[SudokuBoard, SudokuBoard]:
        """
        Generate a puzzle along with its solution.

        Args:
            difficulty: Desired difficulty level.

        Returns:
            Tuple of (puzzle, solution) SudokuBoards.
        """
        puzzle = self.generate(difficulty)
        return puzzle, puzzle.solution

    def random_filled_board(self) -> SudokuBoard:
        """
        Complete a random set of clues into a full, valid grid.

        Raises:
            GenerationExhaustedError: ``max_attempts`` clue sets in a row had
                no completion within the time limit.
        """
        tries = 0
        while self.max_attempts is None or tries < self.max_attempts:
            tries += 1
            solution = self._complete(self._random_clues())
            if solution is not None:
                return solution
            log.debug("Initial clues have no completion, retrying")

        raise GenerationExhaustedError(
            f"No completable clue set found after {tries} attempts"
        )

    def _complete(self, clues: SudokuBoard) -> Optional[SudokuBoard]:
        """Fill in the clues with the heuristic solver, or None on timeout or dead end."""
        solver = HeuristicSolver(time_limit_ms=self.time_limit_ms, max_solutions=1)
        try:
            solutions, _ = solver.solve(clues)
        except SolverTimeoutError:
            return None
        return SudokuBoard.from_board(solutions[0]) if solutions else None

    def _random_clues(self) -> SudokuBoard:
        """
        Place INITIAL_CLUES values at random cells of an empty board.

        Values are taken in ascending order, wrapping from 9 back to 1, so
        every digit appears about equally often.
        """
        board = SudokuBoard()
        clues = 0
        value = 1
        while clues < INITIAL_CLUES:
            row = self.random.randrange(self.size)
            col = self.random.randrange(self.size)
            if board.is_empty(row, col) and board.is_possible(row, col, value):
                board.set(row, col, value)
                clues += 1
                value = value % self.size + 1
        return board

    def _reduce(self, solution: SudokuBoard, difficulty: Difficulty) -> SudokuBoard:
        """
        Clear cells of a filled grid while the deductive solver at the target
        tier keeps finding exactly one solution.
        """
        rows = list(range(self.size))
        cols = list(range(self.size))
        self.random.shuffle(rows)
        self.random.shuffle(cols)

        puzzle = SudokuBoard.from_board(solution)
        for row in rows:
            for col in cols:
                candidate = puzzle.copy()
                candidate.clear(row, col)
                # Clearing leaves candidates stale; rebuild them from the values.
                candidate = SudokuBoard.from_board(candidate)
                candidate.solution = solution

                solver = DeductiveSolver(difficulty, time_limit_ms=self.time_limit_ms)
                try:
                    solutions, _ = solver.solve(candidate)
                except SudokuError as e:
                    log.debug("Keeping [%d][%d]: %s", row, col, e)
                    continue

                if len(solutions) == 1:
                    candidate.solution = None
                    puzzle = candidate
        return puzzle

    def _accept(self, puzzle: SudokuBoard, difficulty: Difficulty) -> bool:
        """Final uniqueness and tier check of a reduced puzzle."""
        try:
            solutions, _ = HeuristicSolver(
                time_limit_ms=self.time_limit_ms, max_solutions=2
            ).solve(puzzle)
            if len(solutions) != 1:
                return False

            solver = DeductiveSolver(difficulty, time_limit_ms=self.time_limit_ms)
            solver.solve(puzzle)
        except SudokuError as e:
            log.debug("Candidate rejected: %s", e)
            return False

        return solver.implied_difficulty() is difficulty

    @staticmethod
    def save_to_folder(puzzles: List[SudokuBoard], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: List of SudokuBoard objects.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.to_string())
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))
                if puzzle.solution is not None:
                    f.write("\n\nSolution:\n")
                    f.write(puzzle.solution.to_string())
                    f.write("\n")
                    f.write(str(puzzle.solution))

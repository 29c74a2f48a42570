"""Unit tests for the human-style deductive solver."""

import pytest
from tiered_sudoku.core.board import SudokuBoard
from tiered_sudoku.core.difficulty import Difficulty
from tiered_sudoku.exceptions import SolvingError, SolverTimeoutError
from tiered_sudoku.solvers import DeductiveSolver, HeuristicSolver


SOLUTION_1 = "123456789456789123789123456214365897365897214897214365531642978642978531978531642"

ROW_GAP = "0" * 9 + SOLUTION_1[9:]

SAMPLE_PUZZLES = [
    "050000816000857090894000000000000643300194050087000020003200007268971000079083061",
    "451902000000806005000700120062000347014000000000023006506347090000000674200009000",
    "000006010000001080204000030400030500000048200506000000730800004020000058001900000",
    "001207000062000000000000940000980003500000000700030021000102000070800410304000080",
    "100040620000000000000090010000000000000035000500010749402001090605009001701028050",
    "130260500060590804900000000800900701000000000200700000000000300350680900000170080",
]

# One puzzle per tier, each needing exactly the techniques of its tier.
TIERED = {
    Difficulty.EASY: SAMPLE_PUZZLES[0],
    Difficulty.NORMAL: SAMPLE_PUZZLES[2],
    Difficulty.HARD: SAMPLE_PUZZLES[4],
    Difficulty.VERY_HARD: SAMPLE_PUZZLES[5],
}


def with_solution(puzzle):
    board = SudokuBoard.from_string(puzzle)
    solutions, _ = HeuristicSolver(max_solutions=2).solve(board)
    assert len(solutions) == 1
    board.solution = solutions[0]
    return board


def blank(solution, cells):
    chars = list(solution)
    for row, col in cells:
        chars[row * 9 + col] = "0"
    return SudokuBoard.from_string("".join(chars))


def one_cell_per_call(counter=None):
    """A stand-in technique that fills the first empty cell from SOLUTION_1."""
    def technique(board, solution=None):
        if counter is not None:
            counter.append(1)
        empty = board.get_empty_cells()
        if not empty:
            return 0
        row, col = empty[0]
        board.set(row, col, int(SOLUTION_1[row * 9 + col]))
        return 1
    return technique


def no_progress(board, solution=None):
    return 0


class TestDeductiveSolver:

    def test_single_pass_is_easy(self):
        solver = DeductiveSolver(Difficulty.EASY)
        solutions, stats = solver.solve(SudokuBoard.from_string(ROW_GAP))

        assert len(solutions) == 1
        assert solutions[0].to_string() == SOLUTION_1
        assert solver.basic_solves == 1
        assert solver.locked_candidates_solves == 0
        assert solver.advanced_solves == 0
        assert solver.implied_difficulty() is Difficulty.EASY
        assert stats.extra["implied_difficulty"] == "easy"
        assert stats.extra["basic_solves"] == 1

    def test_stall_is_unsolved(self):
        solver = DeductiveSolver(Difficulty.VERY_HARD)
        solutions, stats = solver.solve(SudokuBoard())

        assert solutions == []
        assert not stats.solved
        assert solver.implied_difficulty() is None
        assert "implied_difficulty" not in stats.extra

    def test_counters_reset_between_runs(self):
        solver = DeductiveSolver(Difficulty.NORMAL)
        solver.solve(SudokuBoard.from_string(ROW_GAP))
        solver.solve(SudokuBoard())
        assert solver.basic_solves == 0
        assert solver.loops == 1

    def test_wrong_attached_solution_raises(self):
        board = SudokuBoard.from_string(ROW_GAP)
        board.solution = SudokuBoard.from_string("213456789" + SOLUTION_1[9:],
                                                 check_validity=False)
        solver = DeductiveSolver(Difficulty.VERY_HARD)
        with pytest.raises(SolvingError, match=r"\[0\]\[0\] with 1, solution has 2"):
            solver.solve(board)
        assert solver.stats.time_seconds > 0
        assert solver.solutions == []

    def test_timeout(self):
        solver = DeductiveSolver(Difficulty.VERY_HARD, time_limit_ms=0)
        with pytest.raises(SolverTimeoutError):
            solver.solve(SudokuBoard.from_string(ROW_GAP))

    def test_input_board_is_not_modified(self):
        board = SudokuBoard.from_string(ROW_GAP)
        DeductiveSolver().solve(board)
        assert board.to_string() == ROW_GAP


class TestEscalation:
    """The loop logic, driven by stand-in techniques that fill one cell per call."""

    CELLS = [(0, c) for c in range(7)]

    def test_easy_gives_up_after_five_basic_passes(self, monkeypatch):
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_basic",
                            one_cell_per_call())
        solver = DeductiveSolver(Difficulty.EASY)
        solutions, _ = solver.solve(blank(SOLUTION_1, self.CELLS))

        assert solutions == []
        assert solver.basic_solves == 6

    def test_normal_allows_more_basic_passes(self, monkeypatch):
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_basic",
                            one_cell_per_call())
        solver = DeductiveSolver(Difficulty.NORMAL)
        solutions, _ = solver.solve(blank(SOLUTION_1, self.CELLS))

        assert len(solutions) == 1
        assert solver.basic_solves == 7
        assert solver.implied_difficulty() is Difficulty.NORMAL

    def test_five_basic_passes_are_still_easy(self, monkeypatch):
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_basic",
                            one_cell_per_call())
        solver = DeductiveSolver(Difficulty.EASY)
        solutions, _ = solver.solve(blank(SOLUTION_1, self.CELLS[:5]))

        assert len(solutions) == 1
        assert solver.implied_difficulty() is Difficulty.EASY

    def test_locked_candidates_need_hard(self, monkeypatch):
        calls = []
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_basic", no_progress)
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_box_locked_candidates",
                            one_cell_per_call(calls))

        normal = DeductiveSolver(Difficulty.NORMAL)
        assert normal.solve(blank(SOLUTION_1, self.CELLS[:2]))[0] == []
        assert calls == []

        hard = DeductiveSolver(Difficulty.HARD)
        solutions, _ = hard.solve(blank(SOLUTION_1, self.CELLS[:2]))
        assert len(solutions) == 1
        assert hard.locked_candidates_solves == 2
        assert hard.implied_difficulty() is Difficulty.HARD

    def test_line_form_runs_after_box_form(self, monkeypatch):
        order = []

        def box_form(board, solution=None):
            order.append("box")
            return 0

        def line_form(board, solution=None):
            order.append("line")
            return one_cell_per_call()(board)

        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_basic", no_progress)
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_box_locked_candidates",
                            box_form)
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_line_locked_candidates",
                            line_form)

        solver = DeductiveSolver(Difficulty.HARD)
        solutions, _ = solver.solve(blank(SOLUTION_1, self.CELLS[:1]))
        assert len(solutions) == 1
        assert order == ["box", "line"]

    def test_advanced_needs_very_hard(self, monkeypatch):
        for name in ("solve_basic", "solve_box_locked_candidates", "solve_line_locked_candidates"):
            monkeypatch.setattr(f"tiered_sudoku.solvers.deductive_solver.{name}", no_progress)
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_x_wing_and_skyscraper",
                            one_cell_per_call())

        hard = DeductiveSolver(Difficulty.HARD)
        assert hard.solve(blank(SOLUTION_1, self.CELLS[:3]))[0] == []

        very_hard = DeductiveSolver(Difficulty.VERY_HARD)
        solutions, stats = very_hard.solve(blank(SOLUTION_1, self.CELLS[:3]))
        assert len(solutions) == 1
        assert very_hard.advanced_solves == 3
        assert stats.extra["implied_difficulty"] == "very_hard"

    def test_basic_progress_skips_higher_tiers(self, monkeypatch):
        calls = []
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_basic",
                            one_cell_per_call())
        monkeypatch.setattr("tiered_sudoku.solvers.deductive_solver.solve_box_locked_candidates",
                            one_cell_per_call(calls))

        solver = DeductiveSolver(Difficulty.VERY_HARD)
        solver.solve(blank(SOLUTION_1, self.CELLS[:3]))
        assert calls == []
        assert solver.implied_difficulty() is Difficulty.EASY


class TestSamplePuzzles:

    @pytest.mark.parametrize("puzzle", SAMPLE_PUZZLES)
    def test_solves_sample(self, puzzle):
        board = with_solution(puzzle)
        solver = DeductiveSolver(Difficulty.VERY_HARD)
        solutions, _ = solver.solve(board)

        assert len(solutions) == 1
        assert solutions[0] == board.solution

    @pytest.mark.parametrize("tier", list(TIERED))
    def test_implied_tier(self, tier):
        grader = DeductiveSolver(Difficulty.VERY_HARD)
        grader.solve(SudokuBoard.from_string(TIERED[tier]))
        assert grader.implied_difficulty() is tier

    @pytest.mark.parametrize("tier", list(TIERED))
    def test_tiers_are_monotonic(self, tier):
        board = SudokuBoard.from_string(TIERED[tier])
        assert DeductiveSolver(tier).solve(board)[0]
        for lower in Difficulty:
            if lower < tier:
                assert DeductiveSolver(lower).solve(board)[0] == []

    def test_hard_needs_locked_candidates(self):
        board = SudokuBoard.from_string(TIERED[Difficulty.HARD])

        normal = DeductiveSolver(Difficulty.NORMAL)
        assert normal.solve(board)[0] == []
        assert normal.basic_solves == 1

        hard = DeductiveSolver(Difficulty.HARD)
        assert len(hard.solve(board)[0]) == 1
        assert hard.basic_solves == 7
        assert hard.locked_candidates_solves == 1

    def test_very_hard_needs_x_wing_or_skyscraper(self):
        board = with_solution(TIERED[Difficulty.VERY_HARD])

        hard = DeductiveSolver(Difficulty.HARD)
        assert hard.solve(board)[0] == []
        assert hard.basic_solves == 5
        assert hard.locked_candidates_solves == 0

        very_hard = DeductiveSolver(Difficulty.VERY_HARD)
        solutions, stats = very_hard.solve(board)
        assert solutions == [board.solution]
        assert very_hard.basic_solves == 7
        assert very_hard.locked_candidates_solves == 0
        assert very_hard.advanced_solves == 1
        assert stats.extra["implied_difficulty"] == "very_hard"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""Command-line interface for the tiered Sudoku generator and solvers."""

import argparse
import json
import logging
import os
import sys

from .core.board import SudokuBoard
from .core.difficulty import Difficulty
from .core.validator import classify_difficulty
from .exceptions import SudokuError, SolverTimeoutError
from .generator import SudokuGenerator
from .solvers import ExhaustiveSolver, HeuristicSolver, DeductiveSolver
from .solvers.base_solver import DEFAULT_TIME_LIMIT_MS
from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer

log = logging.getLogger(__name__)

DIFFICULTY_CHOICES = [d.value for d in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiered-sudoku",
        description="Sudoku generator and solvers graded by technique tier",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 hard puzzles
  tiered-sudoku generate --count 5 --difficulty hard

  # Solve a puzzle with every solver
  tiered-sudoku solve --algorithm all --puzzle "8.2759.064..3....."

  # Find the technique tier of a puzzle
  tiered-sudoku classify --puzzle "530070000600195000..."

  # Run full benchmark
  tiered-sudoku benchmark --puzzles 10 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="normal",
        help="Difficulty level (default: normal)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--time-limit", type=int, default=DEFAULT_TIME_LIMIT_MS,
        help=f"Time limit per solver run in ms (default: {DEFAULT_TIME_LIMIT_MS})"
    )
    gen_parser.add_argument(
        "--max-attempts", type=int, default=100,
        help="Candidates to try per puzzle before giving up, 0 for no limit (default: 100)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--save-dir", type=str, default=None,
        help="Directory for one text file per puzzle (default: puzzles/ unless --output is given)"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    solve_parser.add_argument(
        "--algorithm", "-a",
        choices=["exhaustive", "heuristic", "deductive", "all"],
        default="heuristic",
        help="Solving algorithm to use (default: heuristic)"
    )
    solve_parser.add_argument(
        "--max-solutions", "-m", type=int, default=1,
        help="Solutions to search for (default: 1, ignored by the deductive solver)"
    )
    solve_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES,
        default=Difficulty.VERY_HARD.value,
        help="Highest technique tier of the deductive solver (default: very_hard)"
    )
    solve_parser.add_argument(
        "--time-limit", type=int, default=DEFAULT_TIME_LIMIT_MS,
        help=f"Time limit in ms (default: {DEFAULT_TIME_LIMIT_MS})"
    )
    solve_parser.add_argument(
        "--no-acceleration", action="store_true",
        help="Disable deductive acceleration in the heuristic solver"
    )
    solve_parser.add_argument(
        "--no-validity-check", action="store_true",
        help="Accept clues that conflict with each other"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS,
        help="Show detailed solving statistics"
    )

    # Classify command
    classify_parser = subparsers.add_parser("classify", help="Find the technique tier of a puzzle")
    classify_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    classify_parser.add_argument(
        "--time-limit", type=int, default=DEFAULT_TIME_LIMIT_MS,
        help=f"Time limit in ms (default: {DEFAULT_TIME_LIMIT_MS})"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--time-limit", type=int, default=DEFAULT_TIME_LIMIT_MS,
        help=f"Time limit per puzzle per solver in ms (default: {DEFAULT_TIME_LIMIT_MS})"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "classify":
        cmd_classify(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _parse_difficulties(value):
    if value == "all":
        return list(Difficulty)
    return [Difficulty(value)]


def _parse_puzzle(text, check_validity=True):
    try:
        return SudokuBoard.from_string(text.strip(), check_validity=check_validity,
                                       puzzle_id="cli")
    except SudokuError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_generate(args):
    """Handle the generate command."""
    generator = SudokuGenerator(
        seed=args.seed,
        time_limit_ms=args.time_limit,
        max_attempts=args.max_attempts or None,
    )

    all_puzzles = []
    by_difficulty = {}

    for difficulty in _parse_difficulties(args.difficulty):
        print(f"\nGenerating {args.count} {difficulty.label} puzzles...")
        try:
            puzzles = generator.generate_batch(args.count, difficulty, show_progress=True)
        except SudokuError as e:
            print(f"Error generating {difficulty.label} puzzles: {e}")
            sys.exit(1)
        by_difficulty[difficulty] = puzzles

        for i, puzzle in enumerate(puzzles, 1):
            all_puzzles.append({
                "id": puzzle.puzzle_id,
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": puzzle.to_string(),
                "solution": puzzle.solution.to_string(),
                "clues": puzzle.count_filled()
            })

            print(f"\n--- {difficulty.label.capitalize()} Puzzle {i} ({puzzle.count_filled()} clues) ---")
            print(puzzle)

    save_dir = args.save_dir
    if save_dir is None and not args.output:
        save_dir = "puzzles"

    if save_dir:
        for difficulty, puzzles in by_difficulty.items():
            diff_dir = os.path.join(save_dir, difficulty.value)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty.value}")
        print(f"\nPuzzles saved individually in the '{save_dir}/' directory")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def _build_solvers(args):
    solvers = {
        "exhaustive": ("Exhaustive", lambda: ExhaustiveSolver(
            time_limit_ms=args.time_limit, max_solutions=args.max_solutions)),
        "heuristic": ("Heuristic", lambda: HeuristicSolver(
            time_limit_ms=args.time_limit, max_solutions=args.max_solutions,
            use_deductive_acceleration=not args.no_acceleration)),
        "deductive": ("Deductive", lambda: DeductiveSolver(
            Difficulty(args.difficulty), time_limit_ms=args.time_limit)),
    }
    if args.algorithm == "all":
        return {name: factory() for name, factory in solvers.values()}
    name, factory = solvers[args.algorithm]
    return {name: factory()}


def cmd_solve(args):
    """Handle the solve command."""
    board = _parse_puzzle(args.puzzle, check_validity=not args.no_validity_check)
    verbose = getattr(args, "verbose", False)

    print("Input puzzle:")
    print(board)
    print()

    try:
        solvers = _build_solvers(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    for name, solver in solvers.items():
        print(f"Solving with {name}...")
        try:
            solutions, stats = solver.solve(board)
        except SolverTimeoutError:
            print(f"✗ Timed out after {args.time_limit} ms")
            print()
            continue
        except SudokuError as e:
            print(f"✗ Failed: {e}")
            print()
            continue

        if stats.solved:
            print(f"✓ Found {len(solutions)} solution(s) in {stats.time_seconds:.4f}s")
            if verbose:
                print(f"  Iterations: {stats.iterations:,}")
                print(f"  Backtracks: {stats.backtracks:,}")
                print(f"  Nodes explored: {stats.nodes_explored:,}")
                for key, value in stats.extra.items():
                    print(f"  {key}: {value}")
            for solution in solutions:
                print(solution)
        else:
            print("✗ Failed to solve")
            if verbose:
                print(f"  Time: {stats.time_seconds:.4f}s")
                print(f"  Iterations: {stats.iterations:,}")
        print()


def cmd_classify(args):
    """Handle the classify command."""
    board = _parse_puzzle(args.puzzle)

    try:
        difficulty = classify_difficulty(board, time_limit_ms=args.time_limit)
    except SolverTimeoutError:
        print(f"Timed out after {args.time_limit} ms")
        sys.exit(1)

    if difficulty is None:
        print("Not solvable with the supported techniques")
    else:
        print(f"Difficulty: {difficulty.value}")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    difficulties = _parse_difficulties(args.difficulty)

    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        time_limit_ms=args.time_limit,
        seed=args.seed
    )

    print(f"Solvers: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    try:
        results = benchmark.run()
    except SudokuError as e:
        print(f"Error preparing benchmark puzzles: {e}")
        sys.exit(1)

    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nBy Solver:")
    print("-" * 50)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()

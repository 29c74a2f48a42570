"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..core.difficulty import Difficulty


TECHNIQUE_COUNTERS = [
    ("basic_solves", "Basic elimination"),
    ("locked_candidates_solves", "Locked candidates"),
    ("advanced_solves", "X-Wing / Skyscraper"),
]


def _difficulty_key(value: str) -> int:
    try:
        return Difficulty(value).level
    except ValueError:
        return len(Difficulty) + 1


class Visualizer:
    """
    Visualization generator for Sudoku solver benchmark results.

    Creates charts comparing solver performance and the techniques each
    tier required.
    """

    # Color palette for algorithms
    COLORS = {
        "Exhaustive": "#2ecc71",  # Green
        "Heuristic": "#3498db",   # Blue
        "Deductive": "#9b59b6",   # Purple
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    @property
    def algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    @property
    def difficulties(self) -> List[str]:
        return sorted(set(r.difficulty for r in self.results), key=_difficulty_key)

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        charts = [
            self.plot_time_comparison(),
            self.plot_time_by_difficulty(),
            self.plot_solve_rate(),
            self.plot_memory_comparison(),
        ]
        technique_chart = self.plot_technique_usage()
        if technique_chart is not None:
            charts.append(technique_chart)
        return charts

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self.algorithms
        avg_times = []
        colors = []

        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        # Add value labels on bars
        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def plot_time_by_difficulty(self) -> str:
        """Create grouped bar chart of times by difficulty and solver."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = self.algorithms
        difficulties = self.difficulties

        x = np.arange(len(difficulties))
        width = 0.8 / len(algorithms)

        for i, algo in enumerate(algorithms):
            times = []
            for diff in difficulties:
                algo_diff_times = [
                    r.time_seconds for r in self.results
                    if r.algorithm == algo and r.difficulty == diff
                ]
                times.append(np.mean(algo_diff_times) if algo_diff_times else 0)

            offset = (i - len(algorithms) / 2 + 0.5) * width
            ax.bar(x + offset, times, width,
                   label=algo,
                   color=self.COLORS.get(algo, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Solve Time by Difficulty and Solver', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([d.replace("_", " ").capitalize() for d in difficulties])
        ax.legend(title='Solver')
        ax.set_ylim(bottom=0)

        return self._save("time_by_difficulty.png")

    def plot_solve_rate(self) -> str:
        """Heatmap of the share of puzzles each solver finished, per difficulty."""
        algorithms = self.algorithms
        difficulties = self.difficulties

        rates = np.zeros((len(algorithms), len(difficulties)))
        for i, algo in enumerate(algorithms):
            for j, diff in enumerate(difficulties):
                subset = [r for r in self.results
                          if r.algorithm == algo and r.difficulty == diff]
                if subset:
                    rates[i, j] = sum(1 for r in subset if r.solved) / len(subset) * 100

        fig, ax = plt.subplots(figsize=(10, 4))
        sns.heatmap(rates, annot=True, fmt=".0f", cmap="RdYlGn", vmin=0, vmax=100,
                    xticklabels=[d.replace("_", " ").capitalize() for d in difficulties],
                    yticklabels=algorithms, cbar_kws={"label": "Solved (%)"}, ax=ax)
        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Solver', fontsize=12)
        ax.set_title('Solve Rate by Difficulty and Solver', fontsize=14, fontweight='bold')

        return self._save("solve_rate.png")

    def plot_memory_comparison(self) -> str:
        """Create bar chart comparing memory usage."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self.algorithms
        avg_memory = []
        colors = []

        for algo in algorithms:
            memory = [r.memory_bytes / (1024 * 1024) for r in self.results if r.algorithm == algo]
            avg_memory.append(np.mean(memory))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_memory, color=colors, edgecolor='black', linewidth=0.5)

        # Add value labels
        for bar, mem in zip(bars, avg_memory):
            height = bar.get_height()
            ax.annotate(f'{mem:.2f} MB',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Average Memory (MB)', fontsize=12)
        ax.set_title('Memory Usage by Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("memory_comparison.png")

    def plot_technique_usage(self):
        """
        Grouped bar chart of how often the deductive solver needed each
        technique, per difficulty. Returns None if no result carries the
        technique counters.
        """
        graded = [r for r in self.results if "basic_solves" in r.extra]
        if not graded:
            return None

        difficulties = sorted(set(r.difficulty for r in graded), key=_difficulty_key)
        x = np.arange(len(difficulties))
        width = 0.8 / len(TECHNIQUE_COUNTERS)
        palette = sns.color_palette("husl", len(TECHNIQUE_COUNTERS))

        fig, ax = plt.subplots(figsize=(12, 6))
        for i, (key, label) in enumerate(TECHNIQUE_COUNTERS):
            means = []
            for diff in difficulties:
                counts = [r.extra[key] for r in graded if r.difficulty == diff]
                means.append(np.mean(counts) if counts else 0)

            offset = (i - len(TECHNIQUE_COUNTERS) / 2 + 0.5) * width
            ax.bar(x + offset, means, width, label=label, color=palette[i],
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Applications', fontsize=12)
        ax.set_title('Techniques Needed by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([d.replace("_", " ").capitalize() for d in difficulties])
        ax.legend(title='Technique')
        ax.set_ylim(bottom=0)

        return self._save("technique_usage.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Solver | Solved | Avg Time | Avg Memory | Avg Iterations |",
            "|--------|--------|----------|------------|----------------|"
        ]

        for algo in self.algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            accuracy = (solved / len(algo_results)) * 100 if algo_results else 0

            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in algo_results])
            avg_iters = np.mean([r.iterations for r in algo_results])

            lines.append(
                f"| {algo} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_memory:.2f} MB | {int(avg_iters):,} |"
            )

        content = "\n".join(lines) + "\n"

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path

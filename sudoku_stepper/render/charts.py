"""Charts for propagation runs: progress per round and candidate heatmaps."""

from __future__ import annotations
import os
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..core.grid import Grid

# Color per run status
STATUS_COLORS = {
    "solved": "#2ecc71",        # Green
    "stalled": "#f39c12",       # Orange
    "contradiction": "#e74c3c", # Red
    "max_rounds": "#9b59b6",    # Purple
    "error": "#95a5a6",         # Grey
}


def _use_style() -> None:
    plt.style.use('seaborn-v0_8-whitegrid')
    sns.set_palette("husl")


def plot_progress(history: Sequence[Tuple[int, int]], output_dir: str) -> str:
    """
    Line chart of solved cells and remaining candidates per round.

    Args:
        history: (solved cells, remaining candidates) per round, round 0 first.
        output_dir: Directory for the PNG.

    Returns:
        Path to the chart.
    """
    _use_style()
    os.makedirs(output_dir, exist_ok=True)

    rounds = np.arange(len(history))
    solved = [h[0] for h in history]
    remaining = [h[1] for h in history]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(rounds, solved, marker='o', color=STATUS_COLORS["solved"], label='Solved cells')
    ax.set_xlabel('Round', fontsize=12)
    ax.set_ylabel('Solved cells', fontsize=12)
    ax.set_ylim(0, 81)

    ax2 = ax.twinx()
    ax2.plot(rounds, remaining, marker='s', color=STATUS_COLORS["max_rounds"], label='Candidates left')
    ax2.set_ylabel('Remaining candidates', fontsize=12)
    ax2.set_ylim(bottom=0)
    ax2.grid(False)

    lines = ax.get_lines() + ax2.get_lines()
    ax.legend(lines, [line.get_label() for line in lines], loc='center right')
    ax.set_title('Propagation Progress', fontsize=14, fontweight='bold')

    plt.tight_layout()
    path = os.path.join(output_dir, "progress.png")
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()

    return path


def plot_candidate_heatmap(grid: Grid, output_dir: str) -> str:
    """Heatmap of remaining candidate counts, one square per cell."""
    _use_style()
    os.makedirs(output_dir, exist_ok=True)

    # candidate_array is [x, y, digit]; heatmap wants [row, col]
    counts = np.count_nonzero(grid.candidate_array, axis=2).T

    fig, ax = plt.subplots(figsize=(8, 7))
    sns.heatmap(counts, annot=True, fmt='d', cmap='YlOrRd', vmin=0, vmax=9,
                linewidths=0.5, linecolor='white', square=True, ax=ax,
                cbar_kws={'label': 'Candidates'})
    ax.set_xlabel('x', fontsize=12)
    ax.set_ylabel('y', fontsize=12)
    ax.set_title('Remaining Candidates per Cell', fontsize=14, fontweight='bold')

    plt.tight_layout()
    path = os.path.join(output_dir, "candidate_heatmap.png")
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()

    return path


def plot_batch_rounds(results: List[Dict], output_dir: str) -> str:
    """Histogram of rounds per puzzle, stacked by run status."""
    _use_style()
    os.makedirs(output_dir, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    statuses = sorted(set(r["status"] for r in results))
    data = [[r["rounds"] for r in results if r["status"] == s] for s in statuses]
    colors = [STATUS_COLORS.get(s, "#95a5a6") for s in statuses]

    ax.hist(data, bins=20, stacked=True, label=statuses, color=colors,
            edgecolor='black', linewidth=0.5)
    ax.set_xlabel('Rounds', fontsize=12)
    ax.set_ylabel('Puzzles', fontsize=12)
    ax.set_title('Rounds to Stable by Outcome', fontsize=14, fontweight='bold')
    ax.legend(title='Status')

    plt.tight_layout()
    path = os.path.join(output_dir, "batch_rounds.png")
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()

    return path

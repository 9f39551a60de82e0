"""Draw a grid (candidates, solved digits, selection) onto a matplotlib axes."""

from __future__ import annotations
from typing import Optional

import matplotlib.pyplot as plt

from ..core.grid import Grid
from ..core.regions import BOX_SIZE, GRID_SIZE
from ..interaction import Selection

CANDIDATE_COLOR = "#1f3cff"
SOLVED_COLOR = "#d62728"
HOVER_COLOR = (0.2, 1.0, 0.2, 0.3)
SELECTED_COLOR = (0.2, 0.2, 1.0, 0.3)


def draw_board(
    ax: plt.Axes,
    grid: Grid,
    selection: Optional[Selection] = None,
    title: Optional[str] = None
) -> None:
    """
    Render the grid in cell units, (0, 0) at the top left.

    Unsolved cells show their remaining candidates in a 3x3 layout; solved
    cells show their digit. Thick lines separate boxes.

    Args:
        ax: Target axes (cleared by the caller if needed).
        grid: The grid to draw.
        selection: Optional hover/selection state to highlight.
        title: Optional axes title.
    """
    solved = grid.solved_array
    candidates = grid.candidate_array

    for x in range(GRID_SIZE):
        for y in range(GRID_SIZE):
            value = int(solved[x, y])
            if value:
                ax.text(x + 0.5, y + 0.5, str(value), ha='center', va='center',
                        fontsize=20, fontweight='bold', color=SOLVED_COLOR)
                continue
            for idx in range(GRID_SIZE):
                if candidates[x, y, idx]:
                    digit_x = x + ((idx % 3) + 0.5) / 3
                    digit_y = y + ((idx // 3) + 0.5) / 3
                    ax.text(digit_x, digit_y, str(idx + 1), ha='center', va='center',
                            fontsize=7, color=CANDIDATE_COLOR)

    if selection is not None:
        hx, hy = selection.hovered
        ax.add_patch(plt.Rectangle((hx, hy), 1, 1, color=HOVER_COLOR, linewidth=0))
        for sx, sy in selection.selected:
            ax.add_patch(plt.Rectangle((sx, sy), 1, 1, color=SELECTED_COLOR, linewidth=0))

    # Grid lines
    for i in range(GRID_SIZE + 1):
        lw = 2.0 if i % BOX_SIZE == 0 else 0.5
        ax.axhline(i, color='black', linewidth=lw)
        ax.axvline(i, color='black', linewidth=lw)

    ax.set_xlim(0, GRID_SIZE)
    ax.set_ylim(GRID_SIZE, 0)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])

    if title:
        ax.set_title(title, fontsize=12, fontweight='bold')


def save_board(grid: Grid, path: str, title: Optional[str] = None, dpi: int = 100) -> str:
    """Render a single grid to an image file and return its path."""
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_board(ax, grid, title=title)
    plt.tight_layout()
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    return path

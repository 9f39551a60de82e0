"""Render loop, board drawing and charts."""

from .loop import RenderLoop
from .board_view import draw_board, save_board
from .viewer import InteractiveViewer, save_animation
from .charts import plot_progress, plot_candidate_heatmap, plot_batch_rounds

__all__ = [
    "RenderLoop",
    "draw_board",
    "save_board",
    "InteractiveViewer",
    "save_animation",
    "plot_progress",
    "plot_candidate_heatmap",
    "plot_batch_rounds",
]

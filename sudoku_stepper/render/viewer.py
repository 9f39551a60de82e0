"""Interactive matplotlib window and GIF export for stepping through a grid."""

from __future__ import annotations
import logging
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter

from .board_view import draw_board
from .loop import RenderLoop
from ..engine.engine import PropagationEngine
from ..interaction import Selection

logger = logging.getLogger(__name__)


class InteractiveViewer:
    """
    Window that redraws the grid and runs one round per animation frame.

    Pointer and key events go to a Selection bound to the same grid. The
    animation timer and the event handlers both run on matplotlib's event
    loop, so edits and rounds never overlap.

    Rounds keep running after the grid is stable, so a manual edit is picked
    up on the next frame.
    """

    def __init__(self, engine: PropagationEngine, delay_ms: int = 400, cell_size: float = 50.0):
        self.engine = engine
        self.delay_ms = delay_ms
        self.selection = Selection(engine.grid, cell_size=cell_size)
        self.loop = RenderLoop(engine, on_frame=self._draw, delay=0, stop_when_stable=False)
        self.fig = None
        self.ax = None
        self._animation = None

    def _draw(self, grid, frame_no: int) -> None:
        self.ax.clear()
        status = "halted" if self.engine.halted else f"round {self.engine.round}"
        draw_board(self.ax, grid, selection=self.selection,
                   title=f"{grid.count_solved()}/81 solved ({status})")

    def _update(self, frame_no: int):
        self.loop.frame()
        return []

    def _cell_units_to_pointer(self, event):
        # Event data coordinates are in cell units.
        return event.xdata * self.selection.cell_size, event.ydata * self.selection.cell_size

    def on_move(self, event) -> None:
        if event.inaxes is not self.ax or event.xdata is None:
            return
        self.selection.pointer_move(*self._cell_units_to_pointer(event))

    def on_press(self, event) -> None:
        if event.inaxes is not self.ax:
            return
        self.selection.pointer_down()

    def on_release(self, event) -> None:
        if not self.selection.is_pointer_down:
            return
        cells = self.selection.pointer_up()
        print(f"Selection: {[list(c) for c in cells]}")

    def on_key(self, event) -> None:
        self.selection.key(event.key)

    def show(self) -> None:
        """Open the window and block until it is closed."""
        self.fig, self.ax = plt.subplots(figsize=(7, 7))
        self.fig.canvas.mpl_connect('motion_notify_event', self.on_move)
        self.fig.canvas.mpl_connect('button_press_event', self.on_press)
        self.fig.canvas.mpl_connect('button_release_event', self.on_release)
        self.fig.canvas.mpl_connect('key_release_event', self.on_key)

        self._animation = FuncAnimation(
            self.fig, self._update, interval=self.delay_ms, cache_frame_data=False
        )
        plt.show()


def save_animation(
    engine: PropagationEngine,
    path: str,
    max_frames: Optional[int] = 200,
    fps: int = 4,
    dpi: int = 80
) -> int:
    """
    Write a GIF with one frame per round until the grid is stable.

    Args:
        engine: Engine bound to the grid to animate.
        path: Output .gif path.
        max_frames: Cap on the number of rounds recorded.
        fps: Playback speed.
        dpi: Frame resolution.

    Returns:
        Number of frames written.
    """
    fig, ax = plt.subplots(figsize=(6, 6))
    writer = PillowWriter(fps=fps)

    with writer.saving(fig, path, dpi):
        def on_frame(grid, frame_no):
            ax.clear()
            draw_board(ax, grid, title=f"Round {frame_no}: {grid.count_solved()}/81 solved")
            writer.grab_frame()

        loop = RenderLoop(engine, on_frame=on_frame, delay=0, max_frames=max_frames)
        frames = loop.run()

    plt.close(fig)
    logger.info("Wrote %d frames to %s", frames, path)
    return frames

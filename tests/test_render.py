"""Tests for the render loop, board drawing and charts."""

from types import SimpleNamespace

import matplotlib.pyplot as plt
import pytest

from sudoku_stepper.core.grid import Grid
from sudoku_stepper.engine import PropagationEngine
from sudoku_stepper.interaction import Selection
from sudoku_stepper.render import InteractiveViewer, RenderLoop, draw_board, save_board, save_animation
from sudoku_stepper.render.charts import plot_batch_rounds, plot_candidate_heatmap, plot_progress


class Recorder:
    """Frame callback that remembers what it was shown."""

    def __init__(self):
        self.frames = []

    def __call__(self, grid, frame_no):
        self.frames.append((frame_no, grid.count_solved()))


class TestRenderLoop:
    """Tests for RenderLoop."""

    def test_runs_until_stable(self, classic_grid):
        recorder = Recorder()
        delays = []
        engine = PropagationEngine(classic_grid, adjacency=False)
        loop = RenderLoop(engine, on_frame=recorder, delay=0.4, sleep=delays.append)

        frames = loop.run()

        assert classic_grid.is_complete()
        assert frames == len(recorder.frames)
        assert [f[0] for f in recorder.frames] == list(range(frames))
        # One round per frame, last drawn state is the solved grid
        assert engine.round == frames - 1
        assert recorder.frames[-1][1] == 81
        assert delays == [0.4] * (frames - 1)

    def test_draws_before_each_round(self, classic_grid):
        recorder = Recorder()
        loop = RenderLoop(PropagationEngine(classic_grid, adjacency=False), on_frame=recorder, delay=0)
        loop.frame()
        assert recorder.frames == [(0, 30)]

    def test_max_frames(self):
        recorder = Recorder()
        engine = PropagationEngine(Grid(), adjacency=False)
        loop = RenderLoop(engine, on_frame=recorder, delay=0, max_frames=5, stop_when_stable=False)

        loop.run()

        assert engine.round == 5
        assert len(recorder.frames) == 6

    def test_stops_when_halted(self, contradiction_grid):
        engine = PropagationEngine(contradiction_grid)
        loop = RenderLoop(engine, delay=0, max_frames=10, stop_when_stable=False)

        assert loop.frame() is None
        assert engine.halted
        assert loop.frame() is None

        loop.run()
        assert engine.round == 1


class TestBoardView:
    """Smoke tests for matplotlib drawing."""

    def test_draw_board(self):
        grid = Grid()
        grid.set_cell(4, 4, 5)
        selection = Selection(grid)
        selection.pointer_move(60, 60)
        selection.pointer_down()

        fig, ax = plt.subplots()
        draw_board(ax, grid, selection=selection, title="test")

        texts = [t.get_text() for t in ax.texts]
        assert texts.count("5") == 81  # 80 candidate 5s plus the solved cell
        assert len(ax.patches) == 2
        plt.close(fig)

    def test_save_board(self, tmp_path):
        path = save_board(Grid(), str(tmp_path / "board.png"))
        assert (tmp_path / "board.png").exists()
        assert path.endswith("board.png")

    def test_save_animation(self, tmp_path):
        engine = PropagationEngine(Grid(), adjacency=False)
        path = tmp_path / "run.gif"

        frames = save_animation(engine, str(path), max_frames=5)

        assert path.exists()
        assert frames == 2


class TestInteractiveViewer:
    """Event handlers of the interactive window, driven without a GUI."""

    def _viewer(self):
        viewer = InteractiveViewer(PropagationEngine(Grid(), adjacency=False))
        viewer.fig, viewer.ax = plt.subplots()
        return viewer

    def test_release_after_press_outside_is_ignored(self, capsys):
        viewer = self._viewer()

        viewer.on_press(SimpleNamespace(inaxes=None))
        viewer.on_release(SimpleNamespace(inaxes=None))

        assert capsys.readouterr().out == ""
        plt.close(viewer.fig)

    def test_press_and_release_prints_selection(self, capsys):
        viewer = self._viewer()

        viewer.on_move(SimpleNamespace(inaxes=viewer.ax, xdata=2.5, ydata=4.5))
        viewer.on_press(SimpleNamespace(inaxes=viewer.ax))
        viewer.on_release(SimpleNamespace(inaxes=viewer.ax))

        assert "Selection: [[2, 4]]" in capsys.readouterr().out
        plt.close(viewer.fig)


class TestCharts:
    """Smoke tests for the seaborn charts."""

    def test_progress_and_heatmap(self, classic_grid, tmp_path):
        stats = PropagationEngine(classic_grid, adjacency=False).run()

        progress = plot_progress(stats.history, str(tmp_path))
        heatmap = plot_candidate_heatmap(classic_grid, str(tmp_path))

        assert (tmp_path / "progress.png").exists()
        assert (tmp_path / "candidate_heatmap.png").exists()
        assert progress != heatmap

    def test_batch_rounds(self, tmp_path):
        results = [
            {"status": "solved", "rounds": 6},
            {"status": "stalled", "rounds": 2},
            {"status": "solved", "rounds": 8},
        ]
        plot_batch_rounds(results, str(tmp_path))
        assert (tmp_path / "batch_rounds.png").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

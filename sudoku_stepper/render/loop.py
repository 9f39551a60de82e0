"""Headless render loop: draw, wait, propagate one round, repeat."""

from __future__ import annotations
import logging
import time
from typing import Callable, Optional

from ..core.errors import ContradictionError
from ..core.grid import Grid
from ..engine.engine import PropagationEngine, RoundReport

logger = logging.getLogger(__name__)

FrameCallback = Callable[[Grid, int], None]


class RenderLoop:
    """
    Drives the engine one round per frame.

    Each frame hands the current grid to the frame callback, waits the fixed
    delay, then runs one round. The delay is presentation only; pass 0 for
    headless use. Convergence happens across frames, never within one.
    """

    def __init__(
        self,
        engine: PropagationEngine,
        on_frame: Optional[FrameCallback] = None,
        delay: float = 0.4,
        max_frames: Optional[int] = None,
        stop_when_stable: bool = True,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the loop.

        Args:
            engine: Engine bound to the grid being displayed.
            on_frame: Called with (grid, frame number) before each round.
            delay: Seconds to wait between drawing and propagating.
            max_frames: Stop after this many frames (None = no limit).
            stop_when_stable: Stop once a round changes nothing.
            sleep: Wait function, replaceable for tests.
        """
        self.engine = engine
        self.on_frame = on_frame
        self.delay = delay
        self.max_frames = max_frames
        self.stop_when_stable = stop_when_stable
        self.sleep = sleep
        self.frames = 0

    def frame(self) -> Optional[RoundReport]:
        """
        Draw the grid, wait, then run one round.

        Returns:
            The round report, or None once the engine is halted.
        """
        if self.on_frame is not None:
            self.on_frame(self.engine.grid, self.frames)
        if self.delay > 0:
            self.sleep(self.delay)
        self.frames += 1

        if self.engine.halted:
            return None
        try:
            return self.engine.step()
        except ContradictionError as e:
            logger.error("Propagation stopped: %s", e)
            return None

    def run(self) -> int:
        """
        Run frames until stable, halted or out of frames.

        The final state is drawn once more before returning.

        Returns:
            Number of frames drawn.
        """
        while self.max_frames is None or self.frames < self.max_frames:
            report = self.frame()
            if report is None:
                break
            if self.stop_when_stable and not report.changed:
                break

        if self.on_frame is not None:
            self.on_frame(self.engine.grid, self.frames)
        self.frames += 1
        return self.frames

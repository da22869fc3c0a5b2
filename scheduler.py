"""
Frame scheduling for animations.

A FrameScheduler owns a millisecond clock and a queue of one-shot frame
callbacks, the same contract as a browser's requestAnimationFrame:

- request_frame(cb) queues cb for the next frame and returns a handle
- cancel(handle) drops a queued callback; unknown or spent handles are ignored
- run_frame() delivers every queued callback once with the frame time

Callbacks requested while a frame is running are deferred to the next frame.
Everything runs on the caller's thread.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from constants import FRAME_INTERVAL_MS

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Base class holding the callback queue; subclasses supply the clock."""

    def __init__(self):
        self._queued: Dict[int, FrameCallback] = {}
        self._running: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""
        pass

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for a frame."""
        return len(self._queued) + len(self._running)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._queued[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is None:
            return
        self._queued.pop(handle, None)
        self._running.pop(handle, None)

    def run_frame(self) -> int:
        """
        Deliver all currently queued callbacks.

        Returns:
            Number of callbacks invoked
        """
        frame_time = self.now()
        self._running, self._queued = self._queued, {}
        invoked = 0
        while self._running:
            handle = next(iter(self._running))
            callback = self._running.pop(handle)
            callback(frame_time)
            invoked += 1
        return invoked


class ManualScheduler(FrameScheduler):
    """
    Scheduler driven by an explicit virtual clock.

    Used by tests and by hosts that own their own render loop.

    Args:
        start_ms: Initial clock value
    """

    def __init__(self, start_ms: float = 0.0):
        super().__init__()
        self._now = start_ms

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> int:
        """Move the clock forward by `ms` and run one frame."""
        if ms < 0:
            raise ValueError("Cannot move the clock backwards")
        self._now += ms
        return self.run_frame()

    def run_until_idle(self, frame_ms: float = FRAME_INTERVAL_MS, max_frames: int = 1_000_000) -> int:
        """
        Run frames at a fixed cadence until nothing is queued.

        The first frame runs at the current time, without advancing.

        Returns:
            Number of frames run
        """
        frames = 0
        step = 0.0
        while self.pending and frames < max_frames:
            self.advance(step)
            step = frame_ms
            frames += 1
        return frames


class RealtimeScheduler(FrameScheduler):
    """
    Scheduler that runs frames against the wall clock.

    Args:
        frame_interval_ms: Target time between frames (default ~60 fps)
        clock: Monotonic clock in seconds
        sleep: Blocking sleep in seconds
    """

    def __init__(
        self,
        frame_interval_ms: float = FRAME_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__()
        if frame_interval_ms <= 0:
            raise ValueError("frame_interval_ms must be positive")
        self.frame_interval_ms = frame_interval_ms
        self._clock = clock
        self._sleep = sleep

    def now(self) -> float:
        return self._clock() * 1000.0

    def run(self) -> int:
        """
        Block, running frames at the configured cadence until idle.

        Returns:
            Number of frames run
        """
        frames = 0
        logger.debug("Realtime scheduler started (%.1f ms frames)", self.frame_interval_ms)
        while self.pending:
            started = self.now()
            self.run_frame()
            frames += 1
            remaining_ms = self.frame_interval_ms - (self.now() - started)
            if remaining_ms > 0 and self.pending:
                self._sleep(remaining_ms / 1000.0)
        logger.debug("Realtime scheduler idle after %d frames", frames)
        return frames

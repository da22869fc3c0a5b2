"""
Orbit track animation.

Turns an ordered sequence of position samples and a total duration into a
continuously updating position and heading, delivered once per scheduler
frame so a marker glides between samples instead of jumping.

Key behaviours:
- The duration is split evenly across the n-1 segments between samples
- Each segment's heading is the great-circle bearing between its endpoints;
  a segment whose endpoints coincide keeps the previous heading
- Positions are interpolated linearly in degree space, taking the shorter
  way across the anti-meridian
- A new start() supersedes the running animation; frames queued by a
  superseded run are dropped by generation check even if already dispatched
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from constants import DEFAULT_HEADING_DEG
from coordinates import bearing, distance_km
from satellite_data.data_models import GeoPoint, PositionSample
from scheduler import FrameScheduler

logger = logging.getLogger(__name__)

# Endpoints closer than this are the same place (e.g. lon 180 vs -180, or the poles)
_SAME_POINT_KM = 1e-9


class InvalidArgumentError(ValueError):
    """Raised when a caller violates an animator or projector contract."""


@dataclass(frozen=True)
class AnimationState:
    """Snapshot of an animated marker.

    Attributes:
        position: Interpolated position
        heading_deg: Heading in [0, 360), degrees clockwise from north
        step_index: Segment being traversed (samples[i] -> samples[i+1])
        progress: Fraction of the whole animation elapsed, 0.0-1.0
    """
    position: GeoPoint
    heading_deg: float
    step_index: int = 0
    progress: float = 0.0


UpdateCallback = Callable[[AnimationState], None]
CompleteCallback = Callable[[], None]


def _wrap_longitude(lon: float) -> float:
    """Map an unwrapped longitude back into [-180, 180)."""
    return ((lon + 180.0) % 360.0) - 180.0


class TrackAnimator:
    """Animates one moving marker along successive sample tracks.

    The animator owns its AnimationState; hosts read it through the
    on_update callback or the `state` property and never mutate it.

    Args:
        scheduler: Frame scheduler delivering animation frames
        no_animate: Skip interpolation and snap straight to the last sample
            (static or low-power displays)
    """

    def __init__(self, scheduler: FrameScheduler, no_animate: bool = False):
        self._scheduler = scheduler
        self.no_animate = no_animate

        self._generation = 0
        self._handle: Optional[int] = None
        self._running = False

        self._state: Optional[AnimationState] = None
        self._heading = DEFAULT_HEADING_DEG

        # Per-run track data
        self._points: List[GeoPoint] = []
        self._lats: Optional[np.ndarray] = None
        self._lons: Optional[np.ndarray] = None  # unwrapped
        self._headings: List[float] = []
        self._total_ms = 0.0
        self._step_ms = 0.0
        self._start_ms = 0.0
        self._on_update: Optional[UpdateCallback] = None
        self._on_complete: Optional[CompleteCallback] = None

    @property
    def state(self) -> Optional[AnimationState]:
        """Last reported state, or None before the first update."""
        return self._state

    @property
    def heading(self) -> float:
        """Last known heading (0 until motion has been observed)."""
        return self._heading

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step_duration_ms(self) -> float:
        return self._step_ms

    def start(
        self,
        samples: Sequence[PositionSample],
        total_duration_ms: float,
        on_update: UpdateCallback,
        on_complete: Optional[CompleteCallback] = None,
    ) -> None:
        """
        Animate along `samples` over `total_duration_ms`.

        Returns immediately; updates arrive on scheduler frames. Single-sample
        tracks, no-animate mode and non-positive durations report their final
        state and complete synchronously.

        Args:
            samples: Ordered positions, earliest first
            total_duration_ms: Time to traverse the whole track
            on_update: Called with every interpolated state
            on_complete: Called once after the final update

        Raises:
            InvalidArgumentError: If samples is empty
        """
        samples = list(samples)
        if not samples:
            raise InvalidArgumentError("TrackAnimator.start() requires at least one sample")

        self.stop()
        generation = self._generation

        self._points = [s.point for s in samples]
        self._on_update = on_update
        self._on_complete = on_complete

        if len(self._points) == 1 or self.no_animate:
            logger.debug("Snapping to last of %d samples", len(self._points))
            self._finish(generation, self._points[-1], self._heading, step_index=0)
            return

        self._headings = self._segment_headings(self._points)

        if total_duration_ms <= 0:
            logger.debug("Non-positive duration %.1f ms, jumping to final sample", total_duration_ms)
            self._finish(generation, self._points[-1], self._headings[-1],
                         step_index=len(self._points) - 2)
            return

        self._lats = np.array([p.latitude for p in self._points], dtype=np.float64)
        self._lons = np.unwrap(np.array([p.longitude for p in self._points], dtype=np.float64),
                               period=360.0)
        self._total_ms = float(total_duration_ms)
        self._step_ms = self._total_ms / (len(self._points) - 1)
        self._start_ms = self._scheduler.now()
        self._running = True

        logger.debug("Animating %d samples over %.0f ms (%.1f ms per step)",
                     len(self._points), self._total_ms, self._step_ms)
        self._request_frame(generation)

    def stop(self) -> None:
        """Cancel the running animation. Safe to call at any time."""
        self._generation += 1
        self._scheduler.cancel(self._handle)
        self._handle = None
        if self._running:
            logger.debug("Animation stopped")
        self._running = False

    def _segment_headings(self, points: List[GeoPoint]) -> List[float]:
        headings = []
        held = self._heading
        for start, end in zip(points, points[1:]):
            if distance_km(start, end) >= _SAME_POINT_KM:
                held = bearing(start, end)
            headings.append(held)
        return headings

    def _request_frame(self, generation: int) -> None:
        def frame(now_ms: float) -> None:
            if generation != self._generation:
                logger.debug("Dropping frame from superseded animation")
                return
            self._handle = None
            self._on_frame(generation, now_ms)

        self._handle = self._scheduler.request_frame(frame)

    def _on_frame(self, generation: int, now_ms: float) -> None:
        elapsed = max(0.0, now_ms - self._start_ms)
        last_step = len(self._points) - 2

        if elapsed >= self._total_ms:
            self._finish(generation, self._points[-1], self._headings[-1], step_index=last_step)
            return

        step = min(int(elapsed // self._step_ms), last_step)
        fraction = min(1.0, max(0.0, (elapsed - step * self._step_ms) / self._step_ms))

        if fraction == 0.0:
            position = self._points[step]
        elif fraction == 1.0:
            position = self._points[step + 1]
        else:
            lat = self._lats[step] + (self._lats[step + 1] - self._lats[step]) * fraction
            lon = self._lons[step] + (self._lons[step + 1] - self._lons[step]) * fraction
            position = GeoPoint(latitude=float(lat), longitude=_wrap_longitude(float(lon)))

        self._emit(AnimationState(
            position=position,
            heading_deg=self._headings[step],
            step_index=step,
            progress=elapsed / self._total_ms,
        ))

        # on_update may have stopped or restarted us
        if generation == self._generation:
            self._request_frame(generation)

    def _finish(self, generation: int, position: GeoPoint, heading_deg: float, step_index: int) -> None:
        self._emit(AnimationState(
            position=position,
            heading_deg=heading_deg,
            step_index=step_index,
            progress=1.0,
        ))
        if generation != self._generation:
            return

        self._running = False
        on_complete = self._on_complete
        logger.debug("Animation complete at (%.4f, %.4f)", position.latitude, position.longitude)
        if on_complete is not None:
            on_complete()

    def _emit(self, state: AnimationState) -> None:
        self._state = state
        self._heading = state.heading_deg
        if self._on_update is not None:
            self._on_update(state)

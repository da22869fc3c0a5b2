"""
Off-screen indicator geometry.

When a tracked target leaves the visible map, an indicator arrow is pinned
to the viewport edge in the target's direction. The projection is a pure
function of the viewport, its geographic centre and bounds, and the target;
hosts re-run it whenever the map pans or zooms or the target moves.

Screen convention: origin top-left, y grows downward, bearing 0 points up
and increases clockwise.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from constants import INDICATOR_PADDING_PX
from coordinates import bearing, distance_km, format_bearing, format_distance
from satellite_data.data_models import GeoBounds, GeoPoint


@dataclass(frozen=True)
class Viewport:
    """Visible map area as reported by the rendering surface.

    Attributes:
        width_px: Width in pixels
        height_px: Height in pixels
        center: Geographic point at the pixel centre
        bounds: Geographic rectangle currently visible
    """
    width_px: float
    height_px: float
    center: GeoPoint
    bounds: GeoBounds

    @property
    def pixel_center(self) -> Tuple[float, float]:
        return self.width_px / 2, self.height_px / 2

    @property
    def is_degenerate(self) -> bool:
        return self.width_px <= 0 or self.height_px <= 0


@dataclass(frozen=True)
class EdgeProjection:
    """Where to draw the off-screen indicator.

    Only `is_offscreen` is meaningful when the target is visible; the other
    fields are None and the indicator should be hidden.
    """
    is_offscreen: bool
    screen_x: Optional[float] = None
    screen_y: Optional[float] = None
    bearing_deg: Optional[float] = None
    distance_km: Optional[float] = None

    @property
    def bearing_label(self) -> Optional[str]:
        """e.g. '45° NE'"""
        if self.bearing_deg is None:
            return None
        return format_bearing(self.bearing_deg)

    @property
    def distance_label(self) -> Optional[str]:
        """e.g. '5,570 KM'"""
        if self.distance_km is None:
            return None
        return format_distance(self.distance_km)


HIDDEN = EdgeProjection(is_offscreen=False)


def _ray_exit(width: float, height: float, sin_b: float, cos_b: float) -> float:
    """Distance along the ray from the pixel centre to the first edge it crosses."""
    cx = width / 2
    cy = height / 2
    t = math.inf

    if sin_b > 0:  # right edge, x = w
        t = min(t, (width - cx) / sin_b)
    if sin_b < 0:  # left edge, x = 0
        t = min(t, -cx / sin_b)
    if cos_b > 0:  # top edge, y = 0
        t = min(t, cy / cos_b)
    if cos_b < 0:  # bottom edge, y = h
        t = min(t, (cy - height) / cos_b)

    return t


def project(
    viewport: Viewport,
    center: GeoPoint,
    bounds: GeoBounds,
    target: GeoPoint,
    padding_px: float = INDICATOR_PADDING_PX,
) -> EdgeProjection:
    """
    Project an off-map target onto the padded viewport edge.

    Args:
        viewport: Pixel size of the visible map
        center: Geographic centre of the view
        bounds: Geographic bounds of the view
        target: Point the indicator should point at
        padding_px: Inward distance kept from the physical edge

    Returns:
        HIDDEN when the target is visible (or the viewport has no area),
        otherwise the clamped screen position with bearing and distance
    """
    if viewport.is_degenerate or bounds.contains(target):
        return HIDDEN

    bearing_deg = bearing(center, target)
    dist_km = distance_km(center, target)

    rad = math.radians(bearing_deg)
    sin_b = math.sin(rad)
    cos_b = math.cos(rad)

    width = viewport.width_px
    height = viewport.height_px
    cx, cy = viewport.pixel_center
    t = _ray_exit(width, height, sin_b, cos_b)

    x = cx + t * sin_b
    y = cy - t * cos_b

    return EdgeProjection(
        is_offscreen=True,
        screen_x=max(padding_px, min(width - padding_px, x)),
        screen_y=max(padding_px, min(height - padding_px, y)),
        bearing_deg=bearing_deg,
        distance_km=dist_km,
    )


class ViewportProjector:
    """Stateless projector carrying only the indicator padding.

    Args:
        padding_px: Inward padding from the viewport edge (default 40px)
    """

    def __init__(self, padding_px: float = INDICATOR_PADDING_PX):
        if padding_px < 0:
            raise ValueError(f"padding_px must be non-negative, got {padding_px}")
        self.padding_px = padding_px

    def project(self, viewport: Viewport, target: GeoPoint) -> EdgeProjection:
        """Project `target` using the viewport's own centre and bounds."""
        return project(viewport, viewport.center, viewport.bounds, target, self.padding_px)

"""
Runtime configuration for the satellite map.

Replaces ambient module constants with an explicit, validated model that
hosts pass to the animator and projector they create.
"""

import logging
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from constants import (
    DEFAULT_DMS,
    DEFAULT_FETCH_INTERVAL_MS,
    DEFAULT_SEARCH_RADIUS_DEG,
    INDICATOR_PADDING_PX,
)
from coordinates import ParseError, parse_dms, parse_location
from satellite_data.data_models import GeoPoint
from scheduler import FrameScheduler
from track_animator import TrackAnimator
from viewport import ViewportProjector

logger = logging.getLogger(__name__)

INVALID_LOCATION_MESSAGE = "Invalid coordinates provided."


def _default_location() -> GeoPoint:
    return parse_dms(DEFAULT_DMS)


class TrackerConfig(BaseModel):
    """
    Settings shared by the tracking views.

    Attributes:
        default_location: Map centre when the user supplies no location
        fallback_location: Map centre when the supplied location is invalid
        fetch_interval_ms: Re-fetch period; also the length of each animation
        indicator_padding_px: Inward padding of the off-screen indicator
        no_animate: Snap markers to their latest position (static displays)
        search_radius_deg: Radius for the "satellites above" query
    """
    model_config = ConfigDict(frozen=True)

    default_location: GeoPoint = Field(default_factory=_default_location)
    fallback_location: GeoPoint = Field(default_factory=lambda: GeoPoint(latitude=0.0, longitude=0.0))
    fetch_interval_ms: int = Field(default=DEFAULT_FETCH_INTERVAL_MS, gt=0)
    indicator_padding_px: float = Field(default=INDICATOR_PADDING_PX, ge=0)
    no_animate: bool = False
    search_radius_deg: float = Field(default=DEFAULT_SEARCH_RADIUS_DEG, ge=0, le=90)

    def resolve_location(self, text: Optional[str]) -> Tuple[GeoPoint, Optional[str]]:
        """
        Turn user-supplied location text into a map centre.

        Args:
            text: DMS or `lat,lng` text, or None/blank for the default

        Returns:
            (location, error) where error is a user-facing message when the
            text was invalid and the fallback location was used
        """
        if text is None or not text.strip():
            return self.default_location, None
        try:
            return parse_location(text.strip()), None
        except ParseError as e:
            logger.warning("Error parsing coordinates %r: %s", text, e)
            return self.fallback_location, INVALID_LOCATION_MESSAGE

    def create_animator(self, scheduler: FrameScheduler) -> TrackAnimator:
        return TrackAnimator(scheduler, no_animate=self.no_animate)

    def create_projector(self) -> ViewportProjector:
        return ViewportProjector(padding_px=self.indicator_padding_px)

"""
Data models for satellite tracking.

Pydantic models for geographic points and bounds, ephemeris position
samples and the satellite records returned by the tracking API.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constants import (
    ISS_APPROX_ALTITUDE_KM,
    ISS_LAUNCH_DATE,
    ISS_NAME,
    ISS_NORAD_ID,
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    TRACKING_URL_TEMPLATE,
)


class GeoPoint(BaseModel):
    """A WGS84 latitude/longitude pair in decimal degrees."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1], description="Latitude in degrees (+N)")
    longitude: float = Field(ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1], description="Longitude in degrees (+E)")

    def as_tuple(self) -> Tuple[float, float]:
        """Return (lat, lon) as used by the map layer."""
        return self.latitude, self.longitude


class GeoBounds(BaseModel):
    """
    Axis-aligned geographic rectangle of the visible map.

    Containment is inclusive on every edge and does not wrap across the
    anti-meridian, matching the bounds reported by the map library.
    """
    model_config = ConfigDict(frozen=True)

    south: float = Field(ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1])
    west: float = Field(ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1])
    north: float = Field(ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1])
    east: float = Field(ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1])

    @model_validator(mode="after")
    def _check_order(self) -> "GeoBounds":
        if self.south > self.north:
            raise ValueError(f"south ({self.south}) must not exceed north ({self.north})")
        if self.west > self.east:
            raise ValueError(f"west ({self.west}) must not exceed east ({self.east})")
        return self

    def contains(self, point: GeoPoint) -> bool:
        return (self.south <= point.latitude <= self.north
                and self.west <= point.longitude <= self.east)

    @classmethod
    def around(cls, center: GeoPoint, lat_span: float, lng_span: float) -> "GeoBounds":
        """
        Build bounds centred on a point, clipped to the valid coordinate range.

        Args:
            center: Centre of the rectangle
            lat_span: Total height in degrees of latitude
            lng_span: Total width in degrees of longitude
        """
        half_lat = lat_span / 2
        half_lng = lng_span / 2
        return cls(
            south=max(LATITUDE_RANGE[0], center.latitude - half_lat),
            west=max(LONGITUDE_RANGE[0], center.longitude - half_lng),
            north=min(LATITUDE_RANGE[1], center.latitude + half_lat),
            east=min(LONGITUDE_RANGE[1], center.longitude + half_lng),
        )


class PositionSample(BaseModel):
    """
    One ephemeris position of a moving object.

    Samples are consumed in sequence order; `timestamp` is informational
    and may be absent when the index alone orders the track.
    """
    model_config = ConfigDict(frozen=True)

    point: GeoPoint
    timestamp: Optional[datetime] = Field(default=None, description="Sample time (UTC)")
    altitude_km: Optional[float] = Field(default=None, description="Altitude above the ellipsoid")

    @property
    def latitude(self) -> float:
        return self.point.latitude

    @property
    def longitude(self) -> float:
        return self.point.longitude

    @classmethod
    def at(cls, latitude: float, longitude: float) -> "PositionSample":
        """Shorthand for an untimed sample."""
        return cls(point=GeoPoint(latitude=latitude, longitude=longitude))

    @classmethod
    def from_api(cls, position: Dict[str, Any]) -> "PositionSample":
        """
        Create a sample from one entry of the API's `positions` array.

        Args:
            position: Dict with `satlatitude`, `satlongitude` and optionally
                `timestamp` (unix seconds) and `sataltitude`

        Returns:
            PositionSample with the timestamp converted to an aware UTC datetime
        """
        timestamp = position.get("timestamp")
        return cls(
            point=GeoPoint(
                latitude=position["satlatitude"],
                longitude=position["satlongitude"],
            ),
            timestamp=datetime.fromtimestamp(timestamp, tz=timezone.utc) if timestamp is not None else None,
            altitude_km=position.get("sataltitude"),
        )


def samples_from_payload(payload: Dict[str, Any]) -> List[PositionSample]:
    """
    Extract ordered position samples from a `satellite-positions` response.

    Returns an empty list when the payload carries no positions; callers must
    skip animation in that case rather than start an animator.
    """
    return [PositionSample.from_api(p) for p in payload.get("positions") or []]


class Satellite(BaseModel):
    """
    A satellite as listed by the tracking API.

    Field names follow the API payload so responses validate directly.
    """
    model_config = ConfigDict(populate_by_name=True)

    satid: int = Field(description="NORAD catalogue number")
    satname: str
    satlat: float = Field(ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1])
    satlng: float = Field(ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1])
    satalt: Optional[float] = Field(default=None, description="Altitude in km")
    launch_date: Optional[str] = Field(default=None, alias="launchDate")

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(latitude=self.satlat, longitude=self.satlng)

    @property
    def launch_year(self) -> Optional[int]:
        """Launch year shown on the marker, or None if unknown."""
        if not self.launch_date:
            return None
        try:
            return int(self.launch_date[:4])
        except ValueError:
            return None

    @property
    def tracking_url(self) -> str:
        return TRACKING_URL_TEMPLATE.format(satid=self.satid)

    @classmethod
    def from_api(cls, entry: Dict[str, Any]) -> "Satellite":
        """Create a Satellite from one entry of the `satellites-above` list."""
        return cls.model_validate(entry)

    @classmethod
    def iss_from_positions(cls, payload: Dict[str, Any]) -> Optional["Satellite"]:
        """
        Build the ISS record from the first entry of a positions response.

        Returns:
            Satellite seeded at the first position, or None if there is none
        """
        positions = payload.get("positions") or []
        if not positions:
            return None
        first = positions[0]
        altitude = first.get("sataltitude", first.get("satalt"))
        return cls(
            satid=ISS_NORAD_ID,
            satname=ISS_NAME,
            satlat=first["satlatitude"],
            satlng=first["satlongitude"],
            satalt=altitude if altitude is not None else ISS_APPROX_ALTITUDE_KM,
            launch_date=ISS_LAUNCH_DATE,
        )

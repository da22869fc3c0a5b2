"""
Coordinate math for the satellite map.

Converts sexagesimal (DMS) coordinate strings to decimal degrees and
computes great-circle bearings and distances between points.

Conventions:
- Bearings are degrees clockwise from true north, always in [0, 360)
- The bearing between two identical points is 0
- Distances use a spherical Earth of radius 6371 km
"""

import logging
import math
import re
from typing import Sequence

import numpy as np
from pydantic import ValidationError

from constants import COMPASS_POINTS, COMPASS_SECTOR_DEG, EARTH_RADIUS_KM
from satellite_data.data_models import GeoPoint

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when coordinate text cannot be converted to a GeoPoint."""


# degrees <sep> minutes <sep> seconds[.frac] <sep>* hemisphere
_DMS_COMPONENT = re.compile(r"(\d+)\D+(\d+)\D+(\d+(?:\.\d+)?)\D*?([NSEW])")


def _dms_component_to_decimal(component: str) -> float:
    match = _DMS_COMPONENT.fullmatch(component)
    if match is None:
        raise ParseError(f"Invalid DMS component format: {component}")

    degrees = float(match.group(1))
    minutes = float(match.group(2))
    seconds = float(match.group(3))
    hemisphere = match.group(4)

    decimal = degrees + minutes / 60 + seconds / 3600
    if hemisphere in ("S", "W"):
        decimal = -decimal
    return decimal


def _to_geopoint(latitude: float, longitude: float, source: str) -> GeoPoint:
    try:
        return GeoPoint(latitude=latitude, longitude=longitude)
    except ValidationError as e:
        raise ParseError(f"Coordinates out of range in {source!r}") from e


def parse_dms(text: str) -> GeoPoint:
    """
    Convert a DMS coordinate pair to decimal degrees.

    Args:
        text: Latitude then longitude separated by whitespace,
            e.g. `40°41'34.4"N 73°58'54.2"W`

    Returns:
        GeoPoint with signed decimal latitude and longitude

    Raises:
        ParseError: If the text is not exactly two valid DMS components, or
            the result falls outside the valid coordinate range
    """
    parts = text.split()
    if len(parts) != 2:
        raise ParseError(f"Invalid DMS string format: {text}")

    latitude = _dms_component_to_decimal(parts[0])
    longitude = _dms_component_to_decimal(parts[1])
    return _to_geopoint(latitude, longitude, text)


def parse_decimal_pair(text: str) -> GeoPoint:
    """Parse a `lat,lng` pair of decimal degrees."""
    parts = text.split(",")
    if len(parts) != 2:
        raise ParseError(f"Invalid decimal coordinate format: {text}")
    try:
        latitude = float(parts[0])
        longitude = float(parts[1])
    except ValueError as e:
        raise ParseError(f"Invalid decimal coordinate format: {text}") from e
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ParseError(f"Invalid decimal coordinate format: {text}")
    return _to_geopoint(latitude, longitude, text)


def parse_location(text: str) -> GeoPoint:
    """
    Parse user-supplied location text.

    DMS is tried first, then a plain `lat,lng` decimal pair. The DMS error is
    re-raised when neither form matches, since DMS is the documented format.
    """
    try:
        return parse_dms(text)
    except ParseError as dms_error:
        try:
            return parse_decimal_pair(text)
        except ParseError:
            logger.debug("Location %r is neither DMS nor a decimal pair", text)
            raise dms_error from None


def bearing(start: GeoPoint, end: GeoPoint) -> float:
    """
    Initial great-circle bearing from `start` to `end`.

    Returns:
        Degrees clockwise from north in [0, 360); 0 for identical points
    """
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    d_lon = math.radians(end.longitude - start.longitude)

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)

    result = (math.degrees(math.atan2(y, x)) + 360) % 360
    # -0.0 and float rounding can land exactly on 360
    return 0.0 if result >= 360 else result


def distance_km(start: GeoPoint, end: GeoPoint) -> float:
    """Haversine great-circle distance in kilometres."""
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(end.longitude - start.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def track_distance_km(points: Sequence[GeoPoint]) -> float:
    """
    Total great-circle length of a path through `points`.

    Vectorised haversine over consecutive pairs; 0 for fewer than two points.
    """
    if len(points) < 2:
        return 0.0

    coords = np.radians(np.array([p.as_tuple() for p in points], dtype=np.float64))
    lat = coords[:, 0]
    lon = coords[:, 1]
    d_lat = np.diff(lat)
    d_lon = np.diff(lon)

    h = np.sin(d_lat / 2) ** 2 + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(d_lon / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    return float(np.sum(2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(h))))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compass_point(bearing_deg: float) -> str:
    """Nearest of the 16 compass points for a bearing, e.g. 45 -> 'NE'."""
    index = _round_half_up(bearing_deg / COMPASS_SECTOR_DEG) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def format_bearing(bearing_deg: float) -> str:
    """Indicator label for a bearing, e.g. '45° NE'."""
    return f"{_round_half_up(bearing_deg)}° {compass_point(bearing_deg)}"


def format_distance(km: float) -> str:
    """Indicator label for a distance, e.g. '5,570 KM'."""
    return f"{_round_half_up(km):,} KM"

"""
Data models for the satellite map core.

Value types shared by coordinate math, the track animator and the
off-screen indicator projector.
"""

from satellite_data.data_models import (
    GeoPoint,
    GeoBounds,
    PositionSample,
    Satellite,
    samples_from_payload,
)

__all__ = [
    "GeoPoint",
    "GeoBounds",
    "PositionSample",
    "Satellite",
    "samples_from_payload",
]

"""
Pytest configuration and fixtures for satellite map core tests.

Provides reusable points, tracks, viewports and a manual frame scheduler.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from satellite_data.data_models import GeoBounds, GeoPoint, PositionSample
from scheduler import ManualScheduler
from viewport import Viewport


@pytest.fixture
def new_york():
    """Fixture providing New York City."""
    return GeoPoint(latitude=40.7128, longitude=-74.0060)


@pytest.fixture
def london():
    """Fixture providing London."""
    return GeoPoint(latitude=51.5074, longitude=-0.1278)


@pytest.fixture
def scheduler():
    """Fixture providing a manual scheduler starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def two_samples():
    """Fixture providing a short northbound-ish ISS track segment."""
    return [
        PositionSample.at(10.0, 20.0),
        PositionSample.at(12.0, 24.0),
    ]


@pytest.fixture
def iss_track():
    """Fixture providing a multi-sample ground track heading east."""
    return [
        PositionSample.at(-10.0, 100.0),
        PositionSample.at(-5.0, 105.0),
        PositionSample.at(0.0, 110.0),
        PositionSample.at(5.0, 115.0),
        PositionSample.at(10.0, 120.0),
    ]


@pytest.fixture
def positions_payload():
    """Fixture providing a `satellite-positions` API response."""
    return {
        "info": {"satname": "SPACE STATION", "satid": 25544, "transactionscount": 3},
        "positions": [
            {"satlatitude": 40.1, "satlongitude": -75.2, "sataltitude": 417.3,
             "azimuth": 210.5, "elevation": 45.2, "timestamp": 1700000000},
            {"satlatitude": 41.0, "satlongitude": -73.0, "sataltitude": 417.4,
             "azimuth": 200.1, "elevation": 50.0, "timestamp": 1700000001},
        ],
    }


@pytest.fixture
def jfk_viewport():
    """Fixture providing an 800x600 viewport centred on JFK, 4° tall."""
    center = GeoPoint(latitude=40.6492, longitude=-73.8952)
    return Viewport(
        width_px=800,
        height_px=600,
        center=center,
        bounds=GeoBounds.around(center, 4.0, 4.0 * 800 / 600),
    )

"""
Tests for TrackerConfig validation and location resolution.

Tests defaults, field constraints, DMS/decimal location fallback and
the factories for animators and projectors.
"""

import logging

import pytest
from unittest.mock import MagicMock

from config import INVALID_LOCATION_MESSAGE, TrackerConfig
from constants import DEFAULT_FETCH_INTERVAL_MS, INDICATOR_PADDING_PX
from satellite_data.data_models import GeoPoint, PositionSample
from scheduler import ManualScheduler
from track_animator import TrackAnimator
from viewport import ViewportProjector


class TestTrackerConfigDefaults:
    """Default values."""

    def test_default_location_is_jfk(self):
        config = TrackerConfig()
        assert config.default_location.latitude == pytest.approx(40.6492, abs=0.001)
        assert config.default_location.longitude == pytest.approx(-73.8952, abs=0.001)

    def test_fallback_is_null_island(self):
        assert TrackerConfig().fallback_location == GeoPoint(latitude=0, longitude=0)

    def test_timing_and_layout_defaults(self):
        config = TrackerConfig()
        assert config.fetch_interval_ms == DEFAULT_FETCH_INTERVAL_MS == 120_000
        assert config.indicator_padding_px == INDICATOR_PADDING_PX == 40
        assert config.no_animate is False
        assert config.search_radius_deg == 15


class TestTrackerConfigValidation:
    """Field constraints."""

    def test_fetch_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            TrackerConfig(fetch_interval_ms=0)

    def test_padding_must_be_non_negative(self):
        with pytest.raises(ValueError):
            TrackerConfig(indicator_padding_px=-5)

    def test_search_radius_range(self):
        with pytest.raises(ValueError):
            TrackerConfig(search_radius_deg=91)

    def test_custom_default_location(self):
        home = GeoPoint(latitude=51.5, longitude=-0.12)
        assert TrackerConfig(default_location=home).default_location == home


class TestResolveLocation:
    """Turning user text into a map centre."""

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_missing_text_uses_default(self, text):
        config = TrackerConfig()
        location, error = config.resolve_location(text)
        assert location == config.default_location
        assert error is None

    def test_dms(self):
        location, error = TrackerConfig().resolve_location("33°51'54.5\"S 151°12'35.6\"E")
        assert error is None
        assert location.latitude == pytest.approx(-33.8651, abs=0.001)

    def test_decimal_pair(self):
        location, error = TrackerConfig().resolve_location("48.8566,2.3522")
        assert error is None
        assert location == GeoPoint(latitude=48.8566, longitude=2.3522)

    def test_invalid_falls_back_and_reports(self, caplog):
        config = TrackerConfig()
        with caplog.at_level(logging.WARNING, logger="config"):
            location, error = config.resolve_location("not a coordinate")
        assert location == config.fallback_location
        assert error == INVALID_LOCATION_MESSAGE
        assert "not a coordinate" in caplog.text


class TestFactories:
    """Animator and projector creation."""

    def test_create_animator(self):
        sched = ManualScheduler()
        animator = TrackerConfig(no_animate=True).create_animator(sched)
        assert isinstance(animator, TrackAnimator)
        assert animator.no_animate is True

    def test_create_projector(self):
        projector = TrackerConfig(indicator_padding_px=12).create_projector()
        assert isinstance(projector, ViewportProjector)
        assert projector.padding_px == 12

    def test_animator_snaps_when_no_animate(self):
        sched = ManualScheduler()
        on_update = MagicMock()
        animator = TrackerConfig(no_animate=True).create_animator(sched)
        animator.start([PositionSample.at(0, 0), PositionSample.at(1, 1)], 1000, on_update)
        on_update.assert_called_once()
        assert on_update.call_args[0][0].position == GeoPoint(latitude=1, longitude=1)

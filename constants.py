"""
Constants for the satellite map core.

Centralized definitions for geodesy, animation timing, indicator layout
and the default tracking location.
"""


# =============================================================================
# Geodesy
# =============================================================================

EARTH_RADIUS_KM = 6371.0

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

# 16-point compass rose, clockwise from north
COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
)
COMPASS_SECTOR_DEG = 360.0 / len(COMPASS_POINTS)  # 22.5


# =============================================================================
# Tracking Defaults
# =============================================================================

DEFAULT_DMS = "40°38'57.3\"N 73°53'42.8\"W"  # JFK, New York

DEFAULT_FETCH_INTERVAL_MS = 2 * 60 * 1000  # Re-fetch and animation length
DEFAULT_SEARCH_RADIUS_DEG = 15             # "Satellites above" search radius

ISS_NORAD_ID = 25544
ISS_NAME = "ISS (ZARYA)"
ISS_LAUNCH_DATE = "1998-11-20"
ISS_APPROX_ALTITUDE_KM = 408

TRACKING_URL_TEMPLATE = "https://www.n2yo.com/?s={satid}&live=1"


# =============================================================================
# Animation
# =============================================================================

FRAME_INTERVAL_MS = 1000.0 / 60.0  # Realtime scheduler cadence (~60 fps)
DEFAULT_HEADING_DEG = 0.0          # Heading before any motion is known


# =============================================================================
# Off-screen Indicator
# =============================================================================

INDICATOR_PADDING_PX = 40  # Inward padding so the arrow never touches the edge

DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_VIEWPORT_HEIGHT = 800
DEFAULT_VIEWPORT_SPAN_DEG = 10.0  # Demo viewport: degrees of latitude shown

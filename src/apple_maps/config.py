"""Default configuration values for the map engine."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Mercator pixel space
# ---------------------------------------------------------------------------

# The pixel space is 2 * ``MERCATOR_OFFSET`` units wide, which matches the
# renderer's native map-point grid.  ``MERCATOR_RADIUS`` is that width divided
# by ``2 * pi`` so one radian of longitude maps onto the radius.
MERCATOR_OFFSET: Final[float] = 268435456.0
MERCATOR_RADIUS: Final[float] = 85445659.44705395
MERCATOR_LAT_BOUND: Final[float] = 85.05112878

# ---------------------------------------------------------------------------
# Zoom and camera
# ---------------------------------------------------------------------------

# At ``BASE_ZOOM_LEVEL`` one screen point covers exactly one pixel-space unit.
BASE_ZOOM_LEVEL: Final[float] = 21.0
DEFAULT_ZOOM_LEVEL: Final[float] = 0.0
DEFAULT_MIN_ZOOM_LEVEL: Final[float] = 2.0
DEFAULT_MAX_ZOOM_LEVEL: Final[float] = 21.0
MAX_CAMERA_ZOOM_LEVEL: Final[float] = 28.0
# Far enough out that the whole world fits many times over; lower levels
# would overflow the pixel-space scale.
MIN_PROJECTED_ZOOM_LEVEL: Final[float] = -64.0

# ``zoomIn`` lifts anything below this level up to it before stepping, and
# ``zoomOut`` collapses to level 0 once the rounded result reaches it.
ZOOM_SNAP_LEVEL: Final[float] = 2.0

CAMERA_HALF_FOV_DEGREES: Final[float] = 15.0
EARTH_RADIUS_METERS: Final[float] = 6378137.0
MAX_PITCH_DEGREES: Final[float] = 90.0

# ---------------------------------------------------------------------------
# Annotations and options
# ---------------------------------------------------------------------------

ANNOTATION_CLUSTERING_IDENTIFIER: Final[str] = "com.sgbasaraner/cluster"
DEFAULT_SCREEN_SCALE: Final[float] = 1.0
OPTIONS_SCHEMA_ID: Final[str] = "apple_maps/options.schema.json"

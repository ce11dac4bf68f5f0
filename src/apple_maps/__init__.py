"""Camera, projection and marker engine behind a host-driven map view."""

from .map_view import CameraController, MarkerStore, OffscreenMapSurface, ZoomState
from .models import CameraPosition, CoordinateSpan, GeoPoint, MapCamera, MapRect, Region, ViewSize

__all__ = [
    "CameraController",
    "CameraPosition",
    "CoordinateSpan",
    "GeoPoint",
    "MapCamera",
    "MapRect",
    "MarkerStore",
    "OffscreenMapSurface",
    "Region",
    "ViewSize",
    "ZoomState",
]

"""Value types shared by the projection, camera and marker modules."""

from .types import (
    CameraPosition,
    CoordinateSpan,
    GeoPoint,
    MapCamera,
    MapRect,
    PixelPoint,
    Region,
    ViewSize,
)

__all__ = [
    "CameraPosition",
    "CoordinateSpan",
    "GeoPoint",
    "MapCamera",
    "MapRect",
    "PixelPoint",
    "Region",
    "ViewSize",
]

"""Data models used by the map engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_pair(cls, value: object) -> "GeoPoint":
        """Build a point from a ``[latitude, longitude]`` sequence.

        ``TypeError``/``ValueError`` propagate for anything that is not a pair
        of numbers so callers can decide whether to drop the payload.
        """

        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise TypeError(f"expected a [latitude, longitude] pair, got {value!r}")
        if len(value) < 2:
            raise ValueError(f"expected a [latitude, longitude] pair, got {value!r}")
        latitude, longitude = value[0], value[1]
        if isinstance(latitude, bool) or isinstance(longitude, bool):
            raise TypeError("coordinates must be numbers")
        return cls(float(latitude), float(longitude))


@dataclass(frozen=True, slots=True)
class PixelPoint:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class CoordinateSpan:
    latitude_delta: float
    longitude_delta: float


@dataclass(frozen=True, slots=True)
class Region:
    center: GeoPoint
    span: CoordinateSpan


@dataclass(frozen=True, slots=True)
class ViewSize:
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True, slots=True)
class MapRect:
    """Axis-aligned rectangle in Mercator pixel space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height


@dataclass(frozen=True, slots=True)
class MapCamera:
    """Camera as applied to the rendering surface."""

    center: GeoPoint
    altitude: float
    pitch: float = 0.0
    heading: float = 0.0


@dataclass(frozen=True, slots=True)
class CameraPosition:
    """Partial camera description coming from the host.

    Every field is optional; missing values fall back to the current camera.
    """

    target: Optional[GeoPoint] = None
    zoom: Optional[float] = None
    pitch: Optional[float] = None
    heading: Optional[float] = None


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

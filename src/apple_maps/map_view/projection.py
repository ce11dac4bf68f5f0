"""Mercator projection helpers used by the camera controller.

Every helper in this module is a pure function.  Coordinates move through a
fixed-resolution pixel space (see :mod:`apple_maps.config`) that sits between
geographic degrees and the renderer's camera altitude.  At zoom level 21 one
screen point equals one pixel-space unit and every level below doubles the
scale.

All arithmetic uses 64-bit floats.  Pixel values are rounded half away from
zero, which is how the renderer's own ``round`` behaves, so spans computed
here line up with regions the renderer reports back.
"""

from __future__ import annotations

import math

from geopy.distance import great_circle

from ..config import (
    BASE_ZOOM_LEVEL,
    CAMERA_HALF_FOV_DEGREES,
    EARTH_RADIUS_METERS,
    MAX_CAMERA_ZOOM_LEVEL,
    MERCATOR_LAT_BOUND,
    MERCATOR_OFFSET,
    MERCATOR_RADIUS,
    MIN_PROJECTED_ZOOM_LEVEL,
)
from ..models.types import CoordinateSpan, GeoPoint, MapRect, PixelPoint, Region, ViewSize


def round_half_away(value: float) -> float:
    """Round *value* to the nearest integer, ties away from zero."""

    return math.copysign(math.floor(abs(value) + 0.5), value)


def round_up_two_decimals(value: float) -> float:
    """Round *value* up to two decimal places.

    ``10.361`` becomes ``10.37``; values already on a hundredth are kept.
    """

    return float(f"{math.ceil(value * 100.0) / 100.0:.2f}")


def clamp_latitude(latitude: float) -> float:
    """Limit *latitude* to the range the Mercator projection can represent."""

    return max(min(float(latitude), MERCATOR_LAT_BOUND), -MERCATOR_LAT_BOUND)


def zoom_scale(zoom_level: float) -> float:
    """Return how many pixel-space units one screen point covers."""

    zoom_level = max(min(zoom_level, MAX_CAMERA_ZOOM_LEVEL), MIN_PROJECTED_ZOOM_LEVEL)
    return 2.0 ** (BASE_ZOOM_LEVEL - zoom_level)


# ---------------------------------------------------------------------------
# Coordinate <-> pixel space
# ---------------------------------------------------------------------------


def longitude_to_pixel_x(longitude: float) -> float:
    """Project *longitude* into the horizontal pixel-space axis."""

    return round_half_away(MERCATOR_OFFSET + MERCATOR_RADIUS * longitude * math.pi / 180.0)


def latitude_to_pixel_y(latitude: float) -> float:
    """Project *latitude* into the vertical pixel-space axis (south is down)."""

    sin_lat = math.sin(math.radians(clamp_latitude(latitude)))
    return round_half_away(
        MERCATOR_OFFSET - MERCATOR_RADIUS * math.log((1.0 + sin_lat) / (1.0 - sin_lat)) / 2.0
    )


def pixel_x_to_longitude(pixel_x: float) -> float:
    """Inverse of :func:`longitude_to_pixel_x`."""

    return ((round_half_away(pixel_x) - MERCATOR_OFFSET) / MERCATOR_RADIUS) * 180.0 / math.pi


_MAX_EXP_ARGUMENT = 709.0


def pixel_y_to_latitude(pixel_y: float) -> float:
    """Inverse of :func:`latitude_to_pixel_y`."""

    exponent = (round_half_away(pixel_y) - MERCATOR_OFFSET) / MERCATOR_RADIUS
    if exponent > _MAX_EXP_ARGUMENT:
        # Far below the bottom of the world.
        return -90.0
    return (math.pi / 2.0 - 2.0 * math.atan(math.exp(exponent))) * 180.0 / math.pi


def coordinate_to_pixel(point: GeoPoint) -> PixelPoint:
    return PixelPoint(longitude_to_pixel_x(point.longitude), latitude_to_pixel_y(point.latitude))


# ---------------------------------------------------------------------------
# Zoom level <-> span / altitude
# ---------------------------------------------------------------------------


def zoom_level_to_span(center: GeoPoint, zoom_level: float, view_size: ViewSize) -> CoordinateSpan:
    """Return the geographic span visible around *center* at *zoom_level*."""

    center_pixel = coordinate_to_pixel(center)

    scale = zoom_scale(zoom_level)
    scaled_width = float(view_size.width) * scale
    scaled_height = float(view_size.height) * scale

    top_left_x = center_pixel.x - scaled_width / 2.0
    top_left_y = center_pixel.y - scaled_height / 2.0

    min_longitude = pixel_x_to_longitude(top_left_x)
    max_longitude = pixel_x_to_longitude(top_left_x + scaled_width)

    min_latitude = pixel_y_to_latitude(top_left_y)
    max_latitude = pixel_y_to_latitude(top_left_y + scaled_height)

    # Pixel y grows southwards, so the bottom edge has the smaller latitude.
    return CoordinateSpan(
        latitude_delta=-1.0 * (max_latitude - min_latitude),
        longitude_delta=max_longitude - min_longitude,
    )


def zoom_level_to_altitude(center: GeoPoint, zoom_level: float, view_size: ViewSize) -> float:
    """Return the camera distance that shows the span of *zoom_level*.

    The camera looks straight down with a 15 degree half field of view, so the
    altitude is the ground distance from the centre to the bottom edge of the
    view divided by ``tan(15°)``.
    """

    center_pixel_y = latitude_to_pixel_y(center.latitude)
    scaled_height = float(view_size.height) * zoom_scale(zoom_level)
    top_left_y = center_pixel_y - scaled_height / 2.0
    edge_latitude = pixel_y_to_latitude(top_left_y + scaled_height)

    edge = GeoPoint(edge_latitude, center.longitude)
    distance = great_circle_distance(center, edge)
    return distance / math.tan(math.radians(CAMERA_HALF_FOV_DEGREES))


def region_to_zoom_level(center: GeoPoint, span: CoordinateSpan, view_width: float) -> float:
    """Return the zoom level whose horizontal span matches *span*.

    Raises ``ValueError`` when the view has no width or the span is empty
    because no finite zoom level describes either case.
    """

    if view_width <= 0:
        raise ValueError("view width must be positive to derive a zoom level")

    center_pixel_x = longitude_to_pixel_x(center.longitude)
    left_longitude = center.longitude - span.longitude_delta / 2.0
    left_pixel_x = longitude_to_pixel_x(left_longitude)
    pixel_width = abs(center_pixel_x - left_pixel_x) * 2.0
    if pixel_width <= 0:
        raise ValueError("longitude span is empty")

    zoom_exponent = math.log2(pixel_width / float(view_width))
    return round_up_two_decimals(BASE_ZOOM_LEVEL - zoom_exponent)


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------


def great_circle_distance(start: GeoPoint, end: GeoPoint) -> float:
    """Return the great-circle distance between two points in metres.

    Latitudes are limited to the poles first because host coordinates are not
    range-checked.
    """

    return great_circle(
        (_clamp_pole(start.latitude), start.longitude),
        (_clamp_pole(end.latitude), end.longitude),
        radius=EARTH_RADIUS_METERS / 1000.0,
    ).meters


def _clamp_pole(latitude: float) -> float:
    return max(min(float(latitude), 90.0), -90.0)


def visible_rect_to_bounds(rect: MapRect) -> dict[str, list[float]]:
    """Convert a pixel-space rectangle into north-east/south-west corners."""

    return {
        "northeast": [pixel_y_to_latitude(rect.min_y), pixel_x_to_longitude(rect.max_x)],
        "southwest": [pixel_y_to_latitude(rect.max_y), pixel_x_to_longitude(rect.min_x)],
    }


def region_to_rect(region: Region) -> MapRect:
    """Return the pixel-space rectangle covered by *region*."""

    center = region.center
    span = region.span
    center_pixel_x = longitude_to_pixel_x(center.longitude)
    half_width = center_pixel_x - longitude_to_pixel_x(center.longitude - span.longitude_delta / 2.0)
    top = latitude_to_pixel_y(center.latitude + span.latitude_delta / 2.0)
    bottom = latitude_to_pixel_y(center.latitude - span.latitude_delta / 2.0)
    return MapRect(center_pixel_x - half_width, top, 2.0 * half_width, bottom - top)


def rect_to_span(rect: MapRect) -> CoordinateSpan:
    """Return the geographic span covered by a pixel-space rectangle."""

    return CoordinateSpan(
        latitude_delta=pixel_y_to_latitude(rect.min_y) - pixel_y_to_latitude(rect.max_y),
        longitude_delta=pixel_x_to_longitude(rect.max_x) - pixel_x_to_longitude(rect.min_x),
    )


def altitude_to_rect(center: GeoPoint, altitude: float, view_size: ViewSize) -> MapRect:
    """Return the pixel-space rectangle a top-down camera at *altitude* sees.

    This inverts :func:`zoom_level_to_altitude` for surfaces that have no
    renderer of their own.  Near whole-world zoom levels the bottom edge is
    clamped to the Mercator bound, so the result is only an approximation
    there.
    """

    center_pixel_x = longitude_to_pixel_x(center.longitude)
    center_pixel_y = latitude_to_pixel_y(center.latitude)
    if view_size.is_empty or altitude <= 0:
        return MapRect(center_pixel_x, center_pixel_y, 0.0, 0.0)

    ground = altitude * math.tan(math.radians(CAMERA_HALF_FOV_DEGREES))
    edge_latitude = center.latitude - math.degrees(ground / EARTH_RADIUS_METERS)
    half_height = latitude_to_pixel_y(edge_latitude) - center_pixel_y
    scale = 2.0 * half_height / float(view_size.height)
    width = float(view_size.width) * scale
    return MapRect(center_pixel_x - width / 2.0, center_pixel_y - half_height, width, 2.0 * half_height)


__all__ = [
    "altitude_to_rect",
    "clamp_latitude",
    "coordinate_to_pixel",
    "great_circle_distance",
    "latitude_to_pixel_y",
    "longitude_to_pixel_x",
    "pixel_x_to_longitude",
    "pixel_y_to_latitude",
    "rect_to_span",
    "region_to_rect",
    "region_to_zoom_level",
    "round_half_away",
    "round_up_two_decimals",
    "visible_rect_to_bounds",
    "zoom_level_to_altitude",
    "zoom_level_to_span",
    "zoom_scale",
]

"""Tests for the Mercator projection helpers."""

import math

import pytest

from apple_maps.config import EARTH_RADIUS_METERS, MERCATOR_LAT_BOUND, MERCATOR_OFFSET, MERCATOR_RADIUS
from apple_maps.map_view import projection
from apple_maps.models.types import CoordinateSpan, GeoPoint, MapRect, Region, ViewSize

CENTER = GeoPoint(37.33, -122.03)
VIEW = ViewSize(1000.0, 800.0)


def test_origin_maps_to_offset():
    assert projection.longitude_to_pixel_x(0.0) == MERCATOR_OFFSET
    assert projection.latitude_to_pixel_y(0.0) == MERCATOR_OFFSET


def test_antimeridian_is_the_right_edge_of_pixel_space():
    assert projection.longitude_to_pixel_x(180.0) == 2 * MERCATOR_OFFSET
    assert projection.longitude_to_pixel_x(-180.0) == 0.0


def test_north_is_smaller_pixel_y():
    assert projection.latitude_to_pixel_y(45.0) < MERCATOR_OFFSET < projection.latitude_to_pixel_y(-45.0)


@pytest.mark.parametrize("longitude", [-179.5, -122.03, 0.0, 13.4, 151.2])
def test_longitude_round_trip(longitude):
    pixel = projection.longitude_to_pixel_x(longitude)
    assert projection.pixel_x_to_longitude(pixel) == pytest.approx(longitude, abs=1e-6)


@pytest.mark.parametrize("latitude", [-80.0, -33.9, 0.0, 37.33, 60.17])
def test_latitude_round_trip(latitude):
    pixel = projection.latitude_to_pixel_y(latitude)
    assert projection.pixel_y_to_latitude(pixel) == pytest.approx(latitude, abs=1e-6)


def test_poles_are_clamped_to_the_mercator_bound():
    assert projection.latitude_to_pixel_y(90.0) == projection.latitude_to_pixel_y(MERCATOR_LAT_BOUND)
    assert projection.latitude_to_pixel_y(-90.0) == projection.latitude_to_pixel_y(-MERCATOR_LAT_BOUND)


def test_round_half_away_from_zero():
    assert projection.round_half_away(2.5) == 3.0
    assert projection.round_half_away(-2.5) == -3.0
    assert projection.round_half_away(2.49) == 2.0


def test_two_decimal_rounding_always_rounds_up():
    # Standard rounding would give 10.36 here.
    assert projection.round_up_two_decimals(10.361) == 10.37
    assert projection.round_up_two_decimals(10.3601) == 10.37
    assert projection.round_up_two_decimals(10.0) == 10.0


def test_span_at_base_zoom_is_one_pixel_per_point():
    span = projection.zoom_level_to_span(GeoPoint(0.0, 0.0), 21.0, ViewSize(400.0, 800.0))
    expected = 400.0 / MERCATOR_RADIUS * 180.0 / math.pi
    assert span.longitude_delta == pytest.approx(expected, rel=1e-9)
    assert span.latitude_delta > 0


def test_span_doubles_per_zoom_level():
    closer = projection.zoom_level_to_span(CENTER, 12.0, VIEW)
    farther = projection.zoom_level_to_span(CENTER, 11.0, VIEW)
    assert farther.longitude_delta == pytest.approx(2 * closer.longitude_delta, rel=1e-6)


def test_span_zoom_is_capped_at_28():
    assert projection.zoom_level_to_span(CENTER, 35.0, VIEW) == projection.zoom_level_to_span(CENTER, 28.0, VIEW)


@pytest.mark.parametrize("view", [VIEW, ViewSize(390.0, 844.0)], ids=["1000x800", "390x844"])
@pytest.mark.parametrize("zoom", [2.0, 3.5, 7.25, 10.0, 12.8, 15.0, 18.0, 20.5, 21.0])
def test_zoom_level_survives_span_round_trip(zoom, view):
    span = projection.zoom_level_to_span(CENTER, zoom, view)
    recovered = projection.region_to_zoom_level(CENTER, span, view.width)
    # Two-decimal round-up can add at most one hundredth.
    assert recovered == pytest.approx(zoom, abs=0.0105)


def test_region_to_zoom_level_rejects_degenerate_input():
    with pytest.raises(ValueError):
        projection.region_to_zoom_level(CENTER, CoordinateSpan(0.1, 0.1), 0.0)
    with pytest.raises(ValueError):
        projection.region_to_zoom_level(CENTER, CoordinateSpan(0.0, 0.0), 400.0)


def test_altitude_matches_ground_distance_near_equator():
    center = GeoPoint(0.0, 10.0)
    size = ViewSize(400.0, 800.0)
    zoom = 14.0
    half_height_px = size.height * 2 ** (21 - zoom) / 2
    ground = EARTH_RADIUS_METERS * half_height_px / MERCATOR_RADIUS
    expected = ground / math.tan(math.radians(15.0))
    assert projection.zoom_level_to_altitude(center, zoom, size) == pytest.approx(expected, rel=1e-4)


def test_altitude_roughly_halves_per_zoom_level():
    high = projection.zoom_level_to_altitude(CENTER, 10.0, VIEW)
    low = projection.zoom_level_to_altitude(CENTER, 11.0, VIEW)
    assert high > low
    assert high / low == pytest.approx(2.0, rel=1e-2)


def test_great_circle_distance_of_one_degree_latitude():
    distance = projection.great_circle_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
    assert distance == pytest.approx(EARTH_RADIUS_METERS * math.pi / 180.0, rel=1e-9)


def test_visible_rect_bounds_are_symmetric_around_origin():
    rect = MapRect(MERCATOR_OFFSET - 100.0, MERCATOR_OFFSET - 50.0, 200.0, 100.0)
    bounds = projection.visible_rect_to_bounds(rect)
    north_east = bounds["northeast"]
    south_west = bounds["southwest"]
    assert north_east[0] > 0 > south_west[0]
    assert north_east[1] > 0 > south_west[1]
    assert north_east[0] == pytest.approx(-south_west[0])
    assert north_east[1] == pytest.approx(-south_west[1])


def test_altitude_to_rect_inverts_zoom_level_to_altitude():
    altitude = projection.zoom_level_to_altitude(CENTER, 12.0, VIEW)
    rect = projection.altitude_to_rect(CENTER, altitude, VIEW)
    span = projection.rect_to_span(rect)
    assert projection.region_to_zoom_level(CENTER, span, VIEW.width) == pytest.approx(12.0, abs=0.0105)


def test_region_to_rect_covers_the_span():
    span = projection.zoom_level_to_span(CENTER, 9.0, VIEW)
    rect = projection.region_to_rect(Region(CENTER, span))
    recovered = projection.rect_to_span(rect)
    assert recovered.longitude_delta == pytest.approx(span.longitude_delta, rel=1e-5)
    assert recovered.latitude_delta == pytest.approx(span.latitude_delta, rel=1e-5)


def test_coordinate_to_pixel_combines_both_axes():
    pixel = projection.coordinate_to_pixel(CENTER)
    assert pixel.x == projection.longitude_to_pixel_x(CENTER.longitude)
    assert pixel.y == projection.latitude_to_pixel_y(CENTER.latitude)


def test_latitude_saturates_far_below_the_world():
    assert projection.pixel_y_to_latitude(1e300) == -90.0
    assert projection.pixel_y_to_latitude(-1e300) == 90.0


@pytest.mark.parametrize("zoom", [-10.0, -64.0, -2000.0])
def test_very_low_zoom_levels_stay_finite(zoom):
    altitude = projection.zoom_level_to_altitude(CENTER, zoom, ViewSize(390.0, 844.0))
    span = projection.zoom_level_to_span(CENTER, zoom, ViewSize(390.0, 844.0))

    assert math.isfinite(altitude)
    assert altitude > 0
    assert math.isfinite(span.longitude_delta)
    assert math.isfinite(span.latitude_delta)


def test_zoom_scale_is_bounded_below():
    assert projection.zoom_scale(-2000.0) == projection.zoom_scale(-64.0)


def test_great_circle_distance_limits_latitudes_to_the_poles():
    distance = projection.great_circle_distance(GeoPoint(95.0, 0.0), GeoPoint(-100.0, 0.0))
    assert distance == pytest.approx(EARTH_RADIUS_METERS * math.pi, rel=1e-9)

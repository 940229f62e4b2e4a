"""Tests for shared geospatial helpers."""

import math
from datetime import datetime

import pytest

from safeher.errors import InputOutOfRange
from safeher.geo_utils import (
    EARTH_RADIUS_M,
    Coordinate,
    LocationFix,
    apple_maps_link,
    create_geofence,
    distance_meters,
    format_coordinates,
    google_maps_link,
    google_maps_link_for_address,
)

NYC = Coordinate(40.7128, -74.0060)
LONDON = Coordinate(51.5074, -0.1278)


class TestCoordinate:

    @pytest.mark.parametrize(
        "lat, lon",
        [(90, 180), (-90, -180), (0, 0), (45.5, -122.6)],
        ids=["north_east_corner", "south_west_corner", "null_island", "portland"],
    )
    def test_valid(self, lat, lon):
        c = Coordinate(lat, lon)
        assert (c.latitude, c.longitude) == (lat, lon)

    @pytest.mark.parametrize(
        "lat, lon, field",
        [(90.0001, 0, "latitude"), (-91, 0, "latitude"), (0, 180.5, "longitude"), (0, -200, "longitude")],
    )
    def test_out_of_range_rejected(self, lat, lon, field):
        with pytest.raises(InputOutOfRange) as exc_info:
            Coordinate(lat, lon)
        assert exc_info.value.field == field

    def test_out_of_range_is_value_error(self):
        with pytest.raises(ValueError):
            Coordinate(120, 0)

    def test_dict_round_trip(self):
        assert Coordinate.from_dict(NYC.to_dict()) == NYC


class TestDistance:

    def test_zero_to_itself(self):
        assert distance_meters(NYC, NYC) == 0

    def test_symmetric(self):
        assert distance_meters(NYC, LONDON) == distance_meters(LONDON, NYC)

    def test_one_degree_of_latitude(self):
        expected = EARTH_RADIUS_M * math.pi / 180
        assert distance_meters(Coordinate(0, 10), Coordinate(1, 10)) == pytest.approx(expected, rel=1e-9)

    def test_new_york_to_london(self):
        assert distance_meters(NYC, LONDON) == pytest.approx(5_570_000, rel=2e-3)

    def test_antipodes(self):
        assert distance_meters(Coordinate(0, 0), Coordinate(0, 180)) == pytest.approx(EARTH_RADIUS_M * math.pi)

    def test_near_antipodal_rounding(self):
        a = Coordinate(66.16849958870057, -136.09604216031624)
        b = Coordinate(-66.16849958870057, 43.90395783968376)

        assert distance_meters(a, b) == pytest.approx(EARTH_RADIUS_M * math.pi)


class TestGeofence:

    def test_contains(self):
        fence = create_geofence(NYC, radius_m=100, now=datetime(2024, 6, 15, 12, 0))

        assert fence.contains(NYC)
        assert not fence.contains(Coordinate(40.7138, -74.0060))  # ~111 m north

    def test_edge_is_inside(self):
        edge = Coordinate(40.7138, -74.0060)
        fence = create_geofence(NYC, radius_m=distance_meters(edge, NYC))
        assert fence.contains(edge)

    def test_id_from_creation_time(self):
        created = datetime(2024, 6, 15, 12, 0)
        fence = create_geofence(NYC, now=created)

        assert fence.id == f"geofence_{int(created.timestamp() * 1000)}"
        assert fence.radius_m == 100
        assert fence.created_at == created


class TestLinks:

    def test_google_maps(self):
        assert google_maps_link(NYC) == "https://maps.google.com/?q=40.7128,-74.006"

    def test_google_maps_address(self):
        link = google_maps_link_for_address("123 Main St, New York")
        assert link == "https://maps.google.com/?q=123%20Main%20St%2C%20New%20York"

    def test_apple_maps(self):
        assert apple_maps_link(NYC) == "http://maps.apple.com/?q=40.7128,-74.006&ll=40.7128,-74.006&z=15"

    def test_format_coordinates(self):
        assert format_coordinates(NYC) == "40.7128, -74.0060"


class TestLocationFix:

    def test_from_dict(self):
        fix = LocationFix.from_dict({
            "latitude": 40.7128,
            "longitude": -74.006,
            "accuracy": 8.5,
            "speed": 4.0,
            "heading": 90,
            "timestamp": "2024-06-15T23:30:00Z",
        })

        assert fix.coordinate == NYC
        assert fix.accuracy_m == 8.5
        assert fix.heading_deg == 90
        assert fix.timestamp.hour == 23

    def test_from_dict_minimal(self):
        fix = LocationFix.from_dict({"latitude": 1, "longitude": 2})
        assert fix.speed_kmh is None
        assert fix.timestamp is None

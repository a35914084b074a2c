"""Mini README: Tests for the geodesy helpers.

Checks the WGS84 distance, bearing and offset helpers against well known
values so the timing maths built on top of them uses consistent units.
"""

from __future__ import annotations

import pytest

from shotplanner.geo import (
    Coordinate,
    bearing_delta,
    destination_point,
    geodesic_distance,
    initial_bearing,
    normalise_bearing,
)


def test_one_degree_of_longitude_on_equator() -> None:
    distance = geodesic_distance(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0))
    assert distance == pytest.approx(111_319.49, abs=0.01)


def test_initial_bearing_cardinal_directions() -> None:
    origin = Coordinate(0.0, 0.0)
    assert initial_bearing(origin, Coordinate(1.0, 0.0)) == pytest.approx(0.0, abs=1e-9)
    assert initial_bearing(origin, Coordinate(0.0, 1.0)) == pytest.approx(90.0, abs=1e-9)
    assert initial_bearing(origin, Coordinate(0.0, -1.0)) == pytest.approx(270.0, abs=1e-9)


def test_initial_bearing_of_coincident_points_is_zero() -> None:
    point = Coordinate(37.88, -4.77)
    assert initial_bearing(point, Coordinate(37.88, -4.77)) == 0.0


def test_destination_point_travels_requested_distance() -> None:
    origin = Coordinate(37.88, -4.77)
    destination = destination_point(origin, 1000.0, 45.0)

    assert geodesic_distance(origin, destination) == pytest.approx(1000.0, abs=1e-6)
    assert initial_bearing(origin, destination) == pytest.approx(45.0, abs=1e-6)


def test_bearing_helpers_wrap_around_north() -> None:
    assert normalise_bearing(-90.0) == pytest.approx(270.0)
    assert normalise_bearing(720.0) == 0.0
    assert bearing_delta(350.0, 10.0) == pytest.approx(20.0)
    assert bearing_delta(0.0, 90.0) == pytest.approx(90.0)
    assert bearing_delta(10.0, 190.0) == pytest.approx(180.0)

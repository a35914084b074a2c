"""Mini README: Tests for recording techniques.

Structure:
    * crane and overhead placement geometry.
    * target/waypoint bookkeeping of the base technique.
    * event forwarding and the technique registry.
"""

from __future__ import annotations

from typing import List, Tuple

import pytest

from shotplanner.errors import ConfigurationError, InvariantViolation, NotFoundError
from shotplanner.geo import bearing_delta, destination_point
from shotplanner.model import Target, TechniqueListener, Waypoint
from shotplanner.techniques import (
    REGISTRY,
    CraneTechnique,
    OverheadTechnique,
    RecordingTechnique,
)

HOME = (37.88, -4.77)


class TwoPointTechnique(RecordingTechnique):
    """Frames each target from a low and a high waypoint."""

    technique_name = "two-point"

    def calculate_route_points_of(self, target: Target) -> List[Waypoint]:
        low = Waypoint.from_target(target)
        low.active_time = 2.0
        high = Waypoint.from_target(target)
        high.height = target.height + 10.0
        high.active_time = 3.0
        high.travel_time = 4.0
        return [low, high]


class EventLog(TechniqueListener):
    def __init__(self) -> None:
        self.events: List[Tuple[str, object]] = []

    def on_new_target(self, target):
        self.events.append(("new_target", target))

    def on_target_changed(self, target):
        self.events.append(("target_changed", target))

    def on_target_deleted(self, target):
        self.events.append(("target_deleted", target))

    def on_new_route_point(self, waypoint):
        self.events.append(("new_route_point", waypoint))

    def on_route_point_changed(self, waypoint):
        self.events.append(("route_point_changed", waypoint))

    def on_route_point_deleted(self, waypoint):
        self.events.append(("route_point_deleted", waypoint))

    def on_technique_parameters_changed(self, technique):
        self.events.append(("parameters_changed", technique))

    def kinds(self, kind: str) -> List[object]:
        return [item for name, item in self.events if name == kind]


def _target_north(distance: float, height: float = 0.0) -> Target:
    origin = Target(*HOME)
    point = destination_point(origin.coordinate, distance, 0.0)
    return Target(point.latitude, point.longitude, height)


def test_crane_straight_overhead_example() -> None:
    crane = CraneTechnique(distance=10.0, attitude=0.0, angle=90.0, hover_time=5.0)
    target = Target(*HOME, 0.0)

    crane.add_target(target)

    (waypoint,) = crane.route_points
    assert waypoint.height == pytest.approx(10.0)
    assert waypoint.calculate_horizontal_distance_to(target) == pytest.approx(0.0, abs=1e-6)
    assert waypoint.pitch == pytest.approx(-90.0, abs=1e-6)
    assert waypoint.focal_distance == pytest.approx(10.0)
    assert waypoint.active_time == 5.0
    assert target.active_time == 5.0
    assert waypoint.associated_target is target


def test_crane_level_shot_from_the_east() -> None:
    crane = CraneTechnique(distance=50.0, attitude=90.0, angle=0.0)
    target = Target(*HOME, 3.0)

    crane.add_target(target)

    waypoint = crane.route_points[0]
    assert waypoint.height == pytest.approx(3.0)
    assert waypoint.calculate_horizontal_distance_to(target) == pytest.approx(50.0, abs=1e-6)
    assert waypoint.bearing == pytest.approx(270.0, abs=0.01)
    assert waypoint.pitch == 0.0
    assert waypoint.focal_distance == pytest.approx(50.0, abs=1e-6)


def test_overhead_constant_bearing_example() -> None:
    overhead = OverheadTechnique(height_over_target=20.0, bearing=45.0, hover_time=3.0, constant_bearing=True)
    first, second = Target(*HOME, 2.0), _target_north(100.0, 5.0)

    overhead.add_target(first)
    overhead.add_target(second)

    for waypoint, target in zip(overhead.route_points, (first, second)):
        assert waypoint.bearing == 45.0
        assert waypoint.height == pytest.approx(target.height + 20.0)
        assert waypoint.coordinate == target.coordinate
        assert waypoint.pitch == -90.0
        assert waypoint.active_time == 3.0


def test_overhead_chains_bearings_towards_next_waypoint() -> None:
    overhead = OverheadTechnique(height_over_target=15.0, bearing=200.0, constant_bearing=False)
    first = Target(*HOME)
    second = _target_north(100.0)
    east = destination_point(second.coordinate, 100.0, 90.0)
    third = Target(east.latitude, east.longitude)

    overhead.add_target(first)
    assert overhead.route_points[0].bearing == 200.0

    overhead.add_target(second)
    overhead.add_target(third)

    wp_first, wp_second, wp_third = overhead.route_points
    assert bearing_delta(wp_first.bearing, 0.0) == pytest.approx(0.0, abs=1e-6)
    assert wp_second.bearing == pytest.approx(90.0, abs=0.01)
    assert wp_third.bearing == wp_second.bearing


def test_overhead_reaims_chained_bearings_after_target_removal() -> None:
    overhead = OverheadTechnique(height_over_target=15.0, bearing=200.0, constant_bearing=False)
    first = Target(*HOME)
    second = _target_north(100.0)
    east = destination_point(second.coordinate, 100.0, 90.0)
    third = Target(east.latitude, east.longitude)
    for target in (first, second, third):
        overhead.add_target(target)

    overhead.remove_target(third)

    wp_first, wp_second = overhead.route_points
    assert bearing_delta(wp_first.bearing, 0.0) == pytest.approx(0.0, abs=1e-6)
    assert wp_second.bearing == pytest.approx(wp_first.calculate_bearing_towards(wp_second))
    assert bearing_delta(wp_second.bearing, 0.0) == pytest.approx(0.0, abs=1e-6)

    overhead.remove_target(first)

    assert overhead.route_points == [wp_second]
    assert wp_second.bearing == 200.0


def test_overhead_updates_waypoint_in_place_when_target_moves() -> None:
    overhead = OverheadTechnique(height_over_target=20.0, bearing=10.0)
    target = Target(*HOME)
    overhead.add_target(target)
    waypoint = overhead.route_points[0]

    target.move(30.0, 90.0)
    target.height = 4.0

    assert overhead.route_points == [waypoint]
    assert waypoint.coordinate == target.coordinate
    assert waypoint.height == pytest.approx(24.0)
    assert waypoint.bearing == 10.0


def test_active_time_aggregates_waypoints_of_target() -> None:
    technique = TwoPointTechnique()
    target = Target(*HOME, travel_time=7.0)

    technique.add_target(target)

    low, high = technique.route_points_of(target)
    assert target.active_time == pytest.approx(2.0 + 3.0 + 4.0)

    high.active_time = 10.0
    assert target.active_time == pytest.approx(2.0 + 10.0 + 4.0)

    low.travel_time = 100.0
    assert target.active_time == pytest.approx(2.0 + 10.0 + 4.0)


def test_editing_target_active_time_restores_aggregate() -> None:
    technique = TwoPointTechnique()
    target = Target(*HOME)
    technique.add_target(target)

    target.active_time = 99.0

    assert target.active_time == pytest.approx(9.0)


def test_target_edit_rederives_waypoints_in_place_of_old_ones() -> None:
    technique = TwoPointTechnique()
    first, second = Target(*HOME), _target_north(200.0)
    technique.add_target(first)
    technique.add_target(second)
    old_low, old_high = technique.route_points_of(first)
    second_points = technique.route_points_of(second)

    first.move(50.0, 180.0)

    new_points = technique.route_points_of(first)
    assert technique.route_points == new_points + second_points
    assert all(point.coordinate == first.coordinate for point in new_points)
    assert old_low.associated_target is None and old_low.change_listener is None
    assert old_high not in technique.route_points
    assert first.active_time == pytest.approx(9.0)


def test_add_target_reports_single_new_target_event() -> None:
    technique = TwoPointTechnique()
    log = EventLog()
    technique.set_listener(log)
    target = Target(*HOME)

    technique.add_target(target)

    assert log.kinds("new_target") == [target]
    assert log.kinds("new_route_point") == technique.route_points
    assert log.events[-1] == ("new_target", target)


def test_remove_target_removes_waypoints_and_unsubscribes() -> None:
    technique = TwoPointTechnique()
    log = EventLog()
    technique.set_listener(log)
    target = Target(*HOME)
    technique.add_target(target)
    waypoints = technique.route_points

    technique.remove_target(target)

    assert technique.targets == [] and technique.route_points == []
    assert log.kinds("route_point_deleted") == waypoints
    assert log.kinds("target_deleted") == [target]
    assert log.events[-1] == ("target_deleted", target)
    assert target.change_listener is None
    with pytest.raises(NotFoundError):
        technique.route_points_of(target)


def test_remove_single_waypoint_updates_active_time() -> None:
    technique = TwoPointTechnique()
    target = Target(*HOME)
    technique.add_target(target)
    low, high = technique.route_points_of(target)

    technique.remove_route_point(high)

    assert technique.route_points_of(target) == [low]
    assert target.active_time == pytest.approx(2.0)
    assert high.associated_target is None


def test_unknown_entities_raise_not_found() -> None:
    technique = CraneTechnique()
    with pytest.raises(NotFoundError):
        technique.remove_target(Target())
    with pytest.raises(NotFoundError):
        technique.remove_route_point(Waypoint())


def test_target_cannot_be_added_twice() -> None:
    technique = CraneTechnique()
    target = Target(*HOME)
    technique.add_target(target)
    with pytest.raises(ValueError):
        technique.add_target(target)


def test_manual_waypoint_is_not_tracked_by_target_bookkeeping() -> None:
    technique = CraneTechnique()
    target = Target(*HOME)
    technique.add_target(target)
    extra = Waypoint(*HOME, 40.0, active_time=8.0)

    technique.add_route_point(extra, 0)
    extra.active_time = 9.0

    assert technique.route_points[0] is extra
    assert target.active_time == 0.0
    technique.verify()


def test_verify_detects_corrupted_active_time() -> None:
    technique = TwoPointTechnique()
    target = Target(*HOME)
    technique.add_target(target)

    target._active_time = 1.0

    with pytest.raises(InvariantViolation):
        technique.verify()


def test_parameter_setters_validate_and_notify() -> None:
    crane = CraneTechnique()
    log = EventLog()
    crane.set_listener(log)

    crane.distance = 25.0
    crane.hover_time = 2.0

    assert log.kinds("parameters_changed") == [crane, crane]
    with pytest.raises(ConfigurationError):
        crane.distance = -1.0
    with pytest.raises(ConfigurationError):
        OverheadTechnique(hover_time=-3.0)


def test_refresh_applies_new_parameters() -> None:
    crane = CraneTechnique(distance=10.0, angle=90.0)
    target = Target(*HOME)
    crane.add_target(target)

    crane.distance = 30.0
    assert crane.route_points[0].height == pytest.approx(10.0)

    crane.refresh()
    assert crane.route_points[0].height == pytest.approx(30.0)


def test_registry_creates_techniques_by_name() -> None:
    assert {"crane", "overhead"} <= set(REGISTRY.available_techniques())

    technique = REGISTRY.create("Overhead", height_over_target=12.0, constant_bearing=False)
    assert isinstance(technique, OverheadTechnique)
    assert technique.parameters()["height_over_target"] == 12.0

    with pytest.raises(NotFoundError):
        REGISTRY.create("dolly")
    with pytest.raises(ConfigurationError):
        REGISTRY.create("crane", zoom=3.0)

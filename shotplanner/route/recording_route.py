"""Mini README: Complete recording route aggregating every technique.

Structure:
    * ConstraintViolation - a waypoint found outside the flight envelope.
    * RecordingRoute - home point, techniques in flight order and constraints.

The route flattens the waypoints of its techniques behind the home point
into the global flight sequence. It listens to every technique: new
waypoints get their travel time raised to the minimum the constraints allow,
and after every waypoint edit the recording actions are repaired so start
and stop recording always form well nested spans. Every event is finally
pushed to the optional ``MapChangeListener`` of the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..configuration import get_settings
from ..errors import NotFoundError
from ..logging_utils import get_logger
from ..model import (
    Action,
    ChangeListener,
    MapChangeListener,
    SpatialPoint,
    Target,
    TechniqueListener,
    Waypoint,
)
from ..techniques import RecordingTechnique
from .constraints import Constraints

LOGGER = get_logger(__name__)


def _advance(recording: bool, action: Action) -> Tuple[bool, bool]:
    """Step the recording state machine, returning (new state, action legal)."""

    if recording:
        if action == Action.STOP_RECORDING:
            return False, True
        return True, action == Action.NOTHING
    if action == Action.START_RECORDING:
        return True, True
    return False, action != Action.STOP_RECORDING


@dataclass(slots=True)
class ConstraintViolation:
    """Waypoint outside the height range or the distance radius."""

    index: int
    waypoint: Waypoint
    message: str


class RecordingRoute(TechniqueListener, ChangeListener):
    """Flight plan made of a home point followed by every technique's waypoints."""

    def __init__(
        self,
        home: Waypoint,
        constraints: Optional[Constraints] = None,
        *,
        map_listener: Optional[MapChangeListener] = None,
        auto_fix_actions: Optional[bool] = None,
    ) -> None:
        if home.associated_target is not None:
            raise ValueError("The home waypoint cannot be associated to a target")
        settings = get_settings()
        self._home = home
        self._constraints = constraints or settings.default_constraints()
        self._techniques: List[RecordingTechnique] = []
        self._map_listener = map_listener
        self._auto_fix_actions = (
            settings.auto_fix_actions if auto_fix_actions is None else auto_fix_actions
        )
        self._recompute_on_parameter_change = settings.recompute_on_parameter_change
        self._fixing_actions = False
        home.set_change_listener(self)
        LOGGER.debug("Initialised RecordingRoute with constraints %s", self._constraints)

    @property
    def home(self) -> Waypoint:
        return self._home

    @property
    def constraints(self) -> Constraints:
        return self._constraints

    @property
    def techniques(self) -> List[RecordingTechnique]:
        return list(self._techniques)

    def set_map_listener(self, listener: Optional[MapChangeListener]) -> None:
        """Register the map or UI layer receiving route events."""

        self._map_listener = listener

    def add_technique(self, technique: RecordingTechnique) -> None:
        """Append ``technique`` to the flight order and adopt what it already owns."""

        if technique in self._techniques:
            raise ValueError(f"{technique.technique_name} technique already belongs to this route")
        self._techniques.append(technique)
        technique.set_listener(self)
        for target in technique.targets:
            self.on_new_target(target)
        for waypoint in technique.route_points:
            self.on_new_route_point(waypoint)
        LOGGER.info(
            "Added %s technique with %s targets to route",
            technique.technique_name,
            len(technique.targets),
        )

    def get_all_route_points(self) -> List[Waypoint]:
        """Return the global flight sequence: home, then each technique in order."""

        waypoints = [self._home]
        for technique in self._techniques:
            waypoints.extend(technique.route_points)
        return waypoints

    # Timing -------------------------------------------------------------

    def min_travel_time_between(self, origin: Waypoint, destination: Waypoint) -> float:
        """Fastest time, in seconds, the constraints allow between two waypoints.

        The bound is the largest of the times needed to cover the straight
        line distance, to rotate the camera bearing and to tilt its pitch.
        """

        constraints = self._constraints
        distance_time = origin.calculate_focal_distance_to(destination) / constraints.max_speed
        bearing_time = origin.calculate_rotation_distance_to(destination) / constraints.max_bearing_speed
        pitch_time = abs(origin.pitch - destination.pitch) / constraints.max_pitch_speed
        return max(0.0, distance_time, bearing_time, pitch_time)

    def total_flight_time(self) -> float:
        """Sum of travel and active times over the whole flight sequence."""

        return sum(waypoint.travel_time + waypoint.active_time for waypoint in self.get_all_route_points())

    def _enforce_travel_time(self, waypoint: Waypoint) -> None:
        """Raise the travel time of ``waypoint`` and of its successor to their floors."""

        waypoints = self.get_all_route_points()
        try:
            index = waypoints.index(waypoint)
        except ValueError:
            return
        self._raise_travel_time(waypoints, index)
        self._raise_travel_time(waypoints, index + 1)

    def _enforce_all_travel_times(self) -> None:
        waypoints = self.get_all_route_points()
        for index in range(1, len(waypoints)):
            self._raise_travel_time(waypoints, index)

    def _raise_travel_time(self, waypoints: List[Waypoint], index: int) -> None:
        if index <= 0 or index >= len(waypoints):
            return
        waypoint = waypoints[index]
        minimum = self.min_travel_time_between(waypoints[index - 1], waypoint)
        if waypoint.travel_time < minimum:
            LOGGER.debug(
                "Raising travel time of waypoint %s from %.2fs to %.2fs",
                index,
                waypoint.travel_time,
                minimum,
            )
            waypoint.travel_time = minimum

    # Actions ------------------------------------------------------------

    def fix_actions(self) -> None:
        """Rewrite illegal actions so recording spans are well nested.

        A stop outside a span and any action other than stop inside a span
        become ``NOTHING``. A span still open at the end of the route is
        closed on the last waypoint.
        """

        if self._fixing_actions:
            return
        self._fixing_actions = True
        try:
            waypoints = self.get_all_route_points()
            recording = False
            for waypoint in waypoints:
                recording, legal = _advance(recording, waypoint.action)
                if not legal:
                    self._rewrite_action(waypoint, Action.NOTHING)
            if recording:
                last = waypoints[-1]
                if last.action == Action.START_RECORDING:
                    # a span cannot open and close on the same waypoint
                    self._rewrite_action(last, Action.NOTHING)
                else:
                    self._rewrite_action(last, Action.STOP_RECORDING)
        finally:
            self._fixing_actions = False

    def _rewrite_action(self, waypoint: Waypoint, action: Action) -> None:
        LOGGER.debug("Rewriting action %s to %s", waypoint.action.value, action.value)
        waypoint.action = action

    def _fix_actions_if_enabled(self) -> None:
        if self._auto_fix_actions:
            self.fix_actions()

    def is_recording(self, waypoint: Waypoint) -> bool:
        """Return whether the camera is recording once ``waypoint`` is reached."""

        waypoints = self.get_all_route_points()
        if waypoint not in waypoints:
            raise NotFoundError(f"{waypoint!r} is not part of this route")
        recording = False
        for candidate in waypoints:
            recording, _ = _advance(recording, candidate.action)
            if candidate is waypoint:
                break
        return recording

    # Constraints --------------------------------------------------------

    def constraint_violations(self) -> List[ConstraintViolation]:
        """List waypoints outside the height range or too far from home."""

        constraints = self._constraints
        violations: List[ConstraintViolation] = []
        for index, waypoint in enumerate(self.get_all_route_points()):
            if waypoint.height < constraints.min_height:
                violations.append(
                    ConstraintViolation(
                        index,
                        waypoint,
                        f"Waypoint {index} height {waypoint.height:.1f}m is below minimum {constraints.min_height}m",
                    )
                )
            if waypoint.height > constraints.max_height:
                violations.append(
                    ConstraintViolation(
                        index,
                        waypoint,
                        f"Waypoint {index} height {waypoint.height:.1f}m is above maximum {constraints.max_height}m",
                    )
                )
            if index:
                distance = waypoint.calculate_horizontal_distance_to(self._home)
                if distance > constraints.max_distance:
                    violations.append(
                        ConstraintViolation(
                            index,
                            waypoint,
                            f"Waypoint {index} is {distance:.1f}m from home, maximum is {constraints.max_distance}m",
                        )
                    )
        if violations:
            LOGGER.warning("Route breaks %s flight constraints", len(violations))
        return violations

    def as_commands(self) -> List[Dict[str, object]]:
        """Convert the flight sequence to command dictionaries for previews."""

        commands: List[Dict[str, object]] = []
        for index, waypoint in enumerate(self.get_all_route_points()):
            commands.append(
                {
                    "index": index,
                    "latitude": waypoint.latitude,
                    "longitude": waypoint.longitude,
                    "height": waypoint.height,
                    "pitch": waypoint.pitch,
                    "bearing": waypoint.bearing,
                    "focal_distance": waypoint.focal_distance,
                    "action": waypoint.action.value,
                    "travel_time": waypoint.travel_time,
                    "active_time": waypoint.active_time,
                }
            )
        return commands

    # Listeners ----------------------------------------------------------

    def on_change(self, point: SpatialPoint) -> None:
        """Edits of the home waypoint."""

        if self._map_listener is not None:
            self._map_listener.waypoint_changed(point)  # type: ignore[arg-type]
        self._enforce_travel_time(self._home)
        self._fix_actions_if_enabled()

    def on_new_target(self, target: Target) -> None:
        if self._map_listener is not None:
            self._map_listener.target_added(target)

    def on_target_changed(self, target: Target) -> None:
        if self._map_listener is not None:
            self._map_listener.target_changed(target)

    def on_target_deleted(self, target: Target) -> None:
        if self._map_listener is not None:
            self._map_listener.target_removed(target)

    def on_new_route_point(self, waypoint: Waypoint) -> None:
        if self._map_listener is not None:
            self._map_listener.waypoint_added(waypoint)
        self._enforce_travel_time(waypoint)
        self._fix_actions_if_enabled()

    def on_route_point_changed(self, waypoint: Waypoint) -> None:
        if self._map_listener is not None:
            self._map_listener.waypoint_changed(waypoint)
        self._enforce_travel_time(waypoint)
        self._fix_actions_if_enabled()

    def on_route_point_deleted(self, waypoint: Waypoint) -> None:
        if self._map_listener is not None:
            self._map_listener.waypoint_removed(waypoint)
        self._enforce_all_travel_times()
        self._fix_actions_if_enabled()

    def on_technique_parameters_changed(self, technique: RecordingTechnique) -> None:
        if self._recompute_on_parameter_change:
            LOGGER.info("Re-deriving waypoints of %s technique", technique.technique_name)
            technique.refresh()
        else:
            LOGGER.debug(
                "Parameters of %s technique changed; waypoints kept until refreshed",
                technique.technique_name,
            )

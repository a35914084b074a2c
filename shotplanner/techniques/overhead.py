"""Mini README: Overhead ("acimutal") shot technique.

The aircraft hovers straight above each target at a fixed height, camera
pointing down. The camera bearing is either a constant configured value or,
when ``constant_bearing`` is off, chained: every waypoint looks towards the
next one so the footage pans along the route.
"""

from __future__ import annotations

from typing import Dict, List

from ..logging_utils import get_logger
from ..model import Target, Waypoint
from .base import RecordingTechnique, non_negative

LOGGER = get_logger(__name__)


class OverheadTechnique(RecordingTechnique):
    """Hover directly above each target."""

    technique_name = "overhead"

    def __init__(
        self,
        height_over_target: float = 20.0,
        bearing: float = 0.0,
        hover_time: float = 0.0,
        constant_bearing: bool = True,
    ) -> None:
        super().__init__()
        self._height_over_target = float(height_over_target)
        self._bearing = float(bearing)
        self._hover_time = non_negative("hover_time", hover_time)
        self._constant_bearing = bool(constant_bearing)

    @property
    def height_over_target(self) -> float:
        return self._height_over_target

    @height_over_target.setter
    def height_over_target(self, value: float) -> None:
        self._height_over_target = float(value)
        self._parameters_changed()

    @property
    def bearing(self) -> float:
        """Camera bearing used when bearings are not chained."""

        return self._bearing

    @bearing.setter
    def bearing(self, value: float) -> None:
        self._bearing = float(value)
        self._parameters_changed()

    @property
    def hover_time(self) -> float:
        return self._hover_time

    @hover_time.setter
    def hover_time(self, value: float) -> None:
        self._hover_time = non_negative("hover_time", value)
        self._parameters_changed()

    @property
    def constant_bearing(self) -> bool:
        return self._constant_bearing

    @constant_bearing.setter
    def constant_bearing(self, value: bool) -> None:
        self._constant_bearing = bool(value)
        self._parameters_changed()

    def parameters(self) -> Dict[str, object]:
        return {
            "height_over_target": self._height_over_target,
            "bearing": self._bearing,
            "hover_time": self._hover_time,
            "constant_bearing": self._constant_bearing,
        }

    def calculate_route_points_of(self, target: Target) -> List[Waypoint]:
        """Place one waypoint above ``target``.

        With chained bearings the previous waypoint of the technique is turned
        towards the new one, and the new one keeps that heading.
        """

        waypoint = Waypoint.from_target(target)
        waypoint.height = target.height + self._height_over_target
        waypoint.active_time = self._hover_time
        waypoint.focus(target)

        if self._route_points and not self._constant_bearing:
            previous = self._route_points[-1]
            bearing = previous.calculate_bearing_towards(waypoint)
            previous.bearing = bearing
            waypoint.bearing = bearing
        else:
            waypoint.bearing = self._bearing
        return [waypoint]

    def on_target_changed(self, target: Target) -> None:
        """Move the target's waypoints in place instead of rebuilding them."""

        waypoints = self.route_points_of(target)
        if not waypoints:
            super().on_target_changed(target)
            return

        for waypoint in waypoints:
            waypoint.set_coordinate(target.latitude, target.longitude)
            waypoint.height = target.height + self._height_over_target
            waypoint.active_time = self._hover_time
            waypoint.focus(target)
        self._apply_bearings()
        self._update_active_time(target)
        LOGGER.debug("Updated %s overhead waypoints in place", len(waypoints))
        self._verify_if_enabled()

    def remove_target(self, target: Target) -> None:
        super().remove_target(target)
        if not self._constant_bearing:
            self._apply_bearings()

    def _apply_bearings(self) -> None:
        """Re-establish the bearing policy over every waypoint of the technique."""

        waypoints = list(self._route_points)
        for index, waypoint in enumerate(waypoints):
            if self._constant_bearing or len(waypoints) == 1:
                bearing = self._bearing
            elif index + 1 < len(waypoints):
                bearing = waypoint.calculate_bearing_towards(waypoints[index + 1])
            else:
                bearing = waypoints[index - 1].calculate_bearing_towards(waypoint)
            if waypoint.bearing != bearing:
                waypoint.bearing = bearing

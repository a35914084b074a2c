"""Mini README: Crane shot technique.

In a crane shot the aircraft frames the target from a fixed point on a
sphere centred on it. ``distance`` is the radius (and therefore the focal
distance), ``attitude`` the side the target is shot from (0 places the
aircraft north of the target, 90 east) and ``angle`` the elevation over the
target (0 level, 90 straight overhead).
"""

from __future__ import annotations

import math
from typing import Dict, List

from ..model import Target, Waypoint
from .base import RecordingTechnique, non_negative


class CraneTechnique(RecordingTechnique):
    """Frame each target from a fixed distance, side and elevation."""

    technique_name = "crane"

    def __init__(
        self,
        distance: float = 10.0,
        attitude: float = 0.0,
        angle: float = 45.0,
        hover_time: float = 0.0,
    ) -> None:
        super().__init__()
        self._distance = non_negative("distance", distance)
        self._attitude = float(attitude)
        self._angle = float(angle)
        self._hover_time = non_negative("hover_time", hover_time)

    @property
    def distance(self) -> float:
        return self._distance

    @distance.setter
    def distance(self, value: float) -> None:
        self._distance = non_negative("distance", value)
        self._parameters_changed()

    @property
    def attitude(self) -> float:
        return self._attitude

    @attitude.setter
    def attitude(self, value: float) -> None:
        self._attitude = float(value)
        self._parameters_changed()

    @property
    def angle(self) -> float:
        return self._angle

    @angle.setter
    def angle(self, value: float) -> None:
        self._angle = float(value)
        self._parameters_changed()

    @property
    def hover_time(self) -> float:
        return self._hover_time

    @hover_time.setter
    def hover_time(self, value: float) -> None:
        self._hover_time = non_negative("hover_time", value)
        self._parameters_changed()

    def parameters(self) -> Dict[str, object]:
        return {
            "distance": self._distance,
            "attitude": self._attitude,
            "angle": self._angle,
            "hover_time": self._hover_time,
        }

    def calculate_route_points_of(self, target: Target) -> List[Waypoint]:
        waypoint = Waypoint.from_target(target)
        elevation = math.radians(self._angle)
        horizontal_distance = self._distance * math.cos(elevation)
        vertical_distance = self._distance * math.sin(elevation)

        waypoint.height = target.height + vertical_distance
        waypoint.move(horizontal_distance, self._attitude)
        waypoint.focus(target)
        waypoint.active_time = self._hover_time
        return [waypoint]

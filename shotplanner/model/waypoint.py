"""Mini README: Waypoints the aircraft flies through.

Structure:
    * Action - discrete camera action executed at a waypoint.
    * Waypoint - position plus camera orientation and an optional back
      reference to the target it was derived from.

Besides its position a waypoint stores where the camera looks: pitch
(0 level, -90 straight down), bearing from true north and focal distance.
The ``calculate_*`` helpers are pure queries; ``focus`` applies all three
orientation values at once and notifies the listener a single time.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from ..errors import ConfigurationError
from ..geo import bearing_delta, geodesic_distance, initial_bearing
from ..logging_utils import get_logger
from .point import SpatialPoint, Target

LOGGER = get_logger(__name__)

MIN_PITCH = -90.0
MAX_PITCH = 0.0


class Action(str, Enum):
    """Camera actions available at a waypoint."""

    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"
    TAKE_IMAGE = "take_image"
    NOTHING = "nothing"

    @classmethod
    def from_str(cls, value: str) -> "Action":
        """Coerce names such as ``START_RECORDING`` or ``take-image`` into an action."""

        try:
            normalised = value.strip().lower().replace("-", "_")
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported waypoint action: {value}") from error


def _check_pitch(pitch: float) -> float:
    pitch = float(pitch)
    if not MIN_PITCH <= pitch <= MAX_PITCH:
        raise ConfigurationError(f"Pitch must be between -90 and 0 degrees, got {pitch}")
    return pitch


class Waypoint(SpatialPoint):
    """A point of the flight plan with camera orientation and action."""

    is_waypoint = True

    def __init__(
        self,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
        *,
        active_time: float = 0.0,
        travel_time: float = 0.0,
        pitch: float = 0.0,
        bearing: float = 0.0,
        focal_distance: float = 0.0,
        action: Action = Action.NOTHING,
        associated_target: Optional[Target] = None,
    ) -> None:
        super().__init__(
            latitude, longitude, height, active_time=active_time, travel_time=travel_time
        )
        self._pitch = _check_pitch(pitch)
        self._bearing = float(bearing)
        self._focal_distance = float(focal_distance)
        self._action = action
        self.associated_target = associated_target

    @classmethod
    def from_target(cls, target: Target) -> "Waypoint":
        """Build a waypoint at the target's position inheriting its travel time."""

        return cls(
            target.latitude,
            target.longitude,
            target.height,
            travel_time=target.travel_time,
            associated_target=target,
        )

    # Camera -------------------------------------------------------------

    @property
    def pitch(self) -> float:
        return self._pitch

    @pitch.setter
    def pitch(self, value: float) -> None:
        self._pitch = _check_pitch(value)
        self._notify()

    @property
    def bearing(self) -> float:
        """Camera heading in degrees relative to true north."""

        return self._bearing

    @bearing.setter
    def bearing(self, value: float) -> None:
        self._bearing = float(value)
        self._notify()

    @property
    def focal_distance(self) -> float:
        return self._focal_distance

    @focal_distance.setter
    def focal_distance(self, value: float) -> None:
        self._focal_distance = float(value)
        self._notify()

    @property
    def action(self) -> Action:
        return self._action

    @action.setter
    def action(self, value: Action) -> None:
        self._action = Action(value)
        self._notify()

    # Queries ------------------------------------------------------------

    def calculate_height_over(self, point: SpatialPoint) -> float:
        """Height difference to ``point``; positive when this waypoint is above it."""

        return self.height - point.height

    def calculate_horizontal_distance_to(self, point: SpatialPoint) -> float:
        """Distance to ``point`` projected on the surface of the earth, in meters."""

        return geodesic_distance(self.coordinate, point.coordinate)

    def calculate_focal_distance_to(self, point: SpatialPoint) -> float:
        """Straight line distance combining height difference and horizontal distance."""

        return math.hypot(self.calculate_height_over(point), self.calculate_horizontal_distance_to(point))

    def calculate_bearing_towards(self, point: SpatialPoint) -> float:
        """Initial geodesic bearing towards ``point``; 0 when both share a coordinate.

        Over long distances, or close to the poles, this differs from the
        bearing measured back from ``point``.
        """

        return initial_bearing(self.coordinate, point.coordinate)

    def calculate_pitch_towards(self, point: SpatialPoint) -> float:
        """Camera pitch in [-90, 0] needed to look at ``point``.

        Points at or above the waypoint give 0; points straight below give -90.
        """

        height = self.calculate_height_over(point)
        if height <= 0:
            return 0.0
        horizontal_distance = self.calculate_horizontal_distance_to(point)
        if horizontal_distance == 0:
            return MIN_PITCH
        return -math.degrees(math.atan(height / horizontal_distance))

    def calculate_rotation_distance_to(self, other: "Waypoint") -> float:
        """Smallest yaw rotation in degrees between this camera bearing and ``other``'s."""

        return bearing_delta(self.bearing, other.bearing)

    def focus(self, point: SpatialPoint) -> None:
        """Point the camera at ``point``, notifying the listener once."""

        self._focal_distance = self.calculate_focal_distance_to(point)
        self._bearing = self.calculate_bearing_towards(point)
        self._pitch = self.calculate_pitch_towards(point)
        LOGGER.debug(
            "Focused waypoint pitch=%.2f bearing=%.2f focal_distance=%.2f",
            self._pitch,
            self._bearing,
            self._focal_distance,
        )
        self._notify()

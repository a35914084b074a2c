"""Mini README: Positional entities of a recording route.

Structure:
    * SpatialPoint - position, height and timing shared by every entity.
    * Target - a point of interest the camera frames.

A spatial point is identified by reference, never by value: two targets at
the same coordinate are different targets. Every setter notifies the single
registered ``ChangeListener`` synchronously, passing the edited point, so the
owning technique can keep its derived waypoints consistent.
"""

from __future__ import annotations

from typing import Optional

from ..geo import Coordinate, destination_point
from .events import ChangeListener


class SpatialPoint:
    """A position over the globe with a height relative to the takeoff point.

    ``active_time`` is the time spent at the point and ``travel_time`` the
    time it takes to arrive from the previous active point, both in seconds.
    """

    is_waypoint: bool = False

    def __init__(
        self,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
        *,
        active_time: float = 0.0,
        travel_time: float = 0.0,
    ) -> None:
        self._latitude = float(latitude)
        self._longitude = float(longitude)
        self._height = float(height)
        self._active_time = float(active_time)
        self._travel_time = float(travel_time)
        self._listener: Optional[ChangeListener] = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(latitude={self._latitude!r}, "
            f"longitude={self._longitude!r}, height={self._height!r})"
        )

    # Listener -----------------------------------------------------------

    @property
    def change_listener(self) -> Optional[ChangeListener]:
        return self._listener

    def set_change_listener(self, listener: Optional[ChangeListener]) -> None:
        """Register ``listener``, silently replacing any previous one."""

        self._listener = listener

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener.on_change(self)

    # Position -----------------------------------------------------------

    @property
    def latitude(self) -> float:
        return self._latitude

    @latitude.setter
    def latitude(self, value: float) -> None:
        self._latitude = float(value)
        self._notify()

    @property
    def longitude(self) -> float:
        return self._longitude

    @longitude.setter
    def longitude(self, value: float) -> None:
        self._longitude = float(value)
        self._notify()

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self._latitude, self._longitude)

    @coordinate.setter
    def coordinate(self, value: Coordinate) -> None:
        self.set_coordinate(value.latitude, value.longitude)

    def set_coordinate(self, latitude: float, longitude: float) -> None:
        """Update latitude and longitude together with a single notification."""

        self._latitude = float(latitude)
        self._longitude = float(longitude)
        self._notify()

    @property
    def height(self) -> float:
        """Height in meters over the takeoff point."""

        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = float(value)
        self._notify()

    # Timing -------------------------------------------------------------

    @property
    def active_time(self) -> float:
        return self._active_time

    @active_time.setter
    def active_time(self, value: float) -> None:
        self._active_time = float(value)
        self._notify()

    @property
    def travel_time(self) -> float:
        return self._travel_time

    @travel_time.setter
    def travel_time(self, value: float) -> None:
        self._travel_time = float(value)
        self._notify()

    def move(self, distance: float, heading: float) -> None:
        """Displace the point ``distance`` meters towards ``heading`` degrees from true north."""

        self.coordinate = destination_point(self.coordinate, distance, heading)


class Target(SpatialPoint):
    """Point of interest used by techniques to derive waypoints.

    A target's ``active_time`` is maintained by the technique that owns it:
    it always equals the time spent across its waypoints.
    """

    def __init__(
        self,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
        *,
        travel_time: float = 0.0,
    ) -> None:
        super().__init__(latitude, longitude, height, travel_time=travel_time)

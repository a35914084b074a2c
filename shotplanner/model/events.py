"""Mini README: Listener interfaces wiring the route model together.

Structure:
    * ChangeListener - notified by a target or waypoint after every edit.
    * TechniqueListener - notified by a technique about structural changes.
    * MapChangeListener - push interface a map or UI layer implements.

Each entity keeps at most one listener. Techniques listen to the entities
they own, routes listen to their techniques, and the outside world listens
to the route, so events always travel from the edited entity outwards.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .point import SpatialPoint, Target
    from .waypoint import Waypoint
    from ..techniques.base import RecordingTechnique


class ChangeListener(ABC):
    """Owner of a target or waypoint."""

    @abstractmethod
    def on_change(self, point: "SpatialPoint") -> None:
        """Called synchronously after any setter of ``point`` ran."""


class TechniqueListener(ABC):
    """Owner of a recording technique, normally a route."""

    @abstractmethod
    def on_new_target(self, target: "Target") -> None:
        """A target was added to the technique."""

    @abstractmethod
    def on_target_changed(self, target: "Target") -> None:
        """A target owned by the technique was edited."""

    @abstractmethod
    def on_target_deleted(self, target: "Target") -> None:
        """A target was removed from the technique."""

    @abstractmethod
    def on_new_route_point(self, waypoint: "Waypoint") -> None:
        """A waypoint was inserted in the technique."""

    @abstractmethod
    def on_route_point_changed(self, waypoint: "Waypoint") -> None:
        """A waypoint owned by the technique was edited."""

    @abstractmethod
    def on_route_point_deleted(self, waypoint: "Waypoint") -> None:
        """A waypoint was removed from the technique."""

    def on_technique_parameters_changed(self, technique: "RecordingTechnique") -> None:
        """One of the shot parameters of ``technique`` changed."""


class MapChangeListener:
    """Callbacks a map or UI layer receives from a route.

    Every hook defaults to a no-op so implementations only override the
    events they render.
    """

    def target_added(self, target: "Target") -> None:
        pass

    def target_changed(self, target: "Target") -> None:
        pass

    def target_removed(self, target: "Target") -> None:
        pass

    def waypoint_added(self, waypoint: "Waypoint") -> None:
        pass

    def waypoint_changed(self, waypoint: "Waypoint") -> None:
        pass

    def waypoint_removed(self, waypoint: "Waypoint") -> None:
        pass

"""Mini README: Abstract base class shared by every recording technique.

Structure:
    * RecordingTechnique - owns targets, the waypoints derived from them and
      the bookkeeping that keeps both consistent while they are edited.

A technique encapsulates one shot pattern. Subclasses only decide where the
waypoints of a single target go (``calculate_route_points_of``); the base
class inserts them, keeps the target's active time equal to the time spent
across its waypoints and re-derives waypoints whenever a target moves. The
technique subscribes to every entity it owns and forwards each event to its
own listener, normally the ``RecordingRoute``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence, Set

from ..configuration import get_settings
from ..errors import ConfigurationError, InvariantViolation, NotFoundError
from ..logging_utils import get_logger
from ..model import ChangeListener, SpatialPoint, Target, TechniqueListener, Waypoint

LOGGER = get_logger(__name__)


def non_negative(name: str, value: float) -> float:
    """Validate a technique parameter that cannot be negative."""

    value = float(value)
    if value < 0:
        raise ConfigurationError(f"{name} must be zero or positive, got {value}")
    return value


class RecordingTechnique(ChangeListener, ABC):
    """Base interface for shot patterns turning targets into waypoints."""

    technique_name: str = "generic"

    def __init__(self) -> None:
        self._targets: List[Target] = []
        self._route_points: List[Waypoint] = []
        self._points_by_target: Dict[Target, List[Waypoint]] = {}
        self._listener: Optional[TechniqueListener] = None
        self._syncing: Set[Target] = set()
        self._verify_invariants = get_settings().verify_invariants
        LOGGER.debug("Initialising %s technique", self.technique_name)

    @abstractmethod
    def calculate_route_points_of(self, target: Target) -> Sequence[Waypoint]:
        """Return freshly built waypoints for ``target`` without inserting them."""

    def parameters(self) -> Dict[str, object]:
        """Return the shot parameters for display purposes."""

        return {}

    # Accessors ----------------------------------------------------------

    @property
    def targets(self) -> List[Target]:
        return list(self._targets)

    @property
    def route_points(self) -> List[Waypoint]:
        """Waypoints of the technique in flight order."""

        return list(self._route_points)

    def route_points_of(self, target: Target) -> List[Waypoint]:
        """Return the waypoints derived from ``target`` in flight order."""

        try:
            return list(self._points_by_target[target])
        except KeyError as error:
            raise NotFoundError(f"{target!r} is not part of this {self.technique_name} technique") from error

    @property
    def listener(self) -> Optional[TechniqueListener]:
        return self._listener

    def set_listener(self, listener: Optional[TechniqueListener]) -> None:
        """Register the owner notified about structural changes."""

        self._listener = listener

    # Add ----------------------------------------------------------------

    def add_target(self, target: Target) -> None:
        """Append ``target`` and insert the waypoints derived from it."""

        if target in self._points_by_target:
            raise ValueError(f"{target!r} already belongs to this technique")
        self._targets.append(target)
        waypoints = list(self.calculate_route_points_of(target))
        self._points_by_target[target] = []
        for waypoint in waypoints:
            self._attach(target, waypoint)
            self.add_route_point(waypoint)

        self._update_active_time(target)
        target.set_change_listener(self)
        LOGGER.info(
            "Added target to %s technique with %s waypoints", self.technique_name, len(waypoints)
        )

        if self._listener is not None:
            self._listener.on_new_target(target)
        self._verify_if_enabled()

    def add_route_point(self, waypoint: Waypoint, index: Optional[int] = None) -> None:
        """Insert ``waypoint`` at ``index`` or at the end of the flight order."""

        if waypoint in self._route_points:
            raise ValueError(f"{waypoint!r} already belongs to this technique")
        if index is None:
            self._route_points.append(waypoint)
        else:
            self._route_points.insert(index, waypoint)
        waypoint.set_change_listener(self)
        if self._listener is not None:
            self._listener.on_new_route_point(waypoint)

    # Remove -------------------------------------------------------------

    def remove_target(self, target: Target) -> None:
        """Remove ``target`` together with every waypoint derived from it."""

        for waypoint in self.route_points_of(target):
            self.remove_route_point(waypoint)
        self._targets.remove(target)
        del self._points_by_target[target]
        if target.change_listener is self:
            target.set_change_listener(None)
        LOGGER.info("Removed target from %s technique", self.technique_name)

        if self._listener is not None:
            self._listener.on_target_deleted(target)
        self._verify_if_enabled()

    def remove_route_point(self, waypoint: Waypoint) -> None:
        """Remove ``waypoint`` from the flight order and from its target."""

        if waypoint not in self._route_points:
            raise NotFoundError(f"{waypoint!r} is not part of this {self.technique_name} technique")
        self._route_points.remove(waypoint)
        target = waypoint.associated_target
        owned = target is not None and target in self._points_by_target
        if owned and waypoint in self._points_by_target[target]:
            self._points_by_target[target].remove(waypoint)
        waypoint.associated_target = None
        if waypoint.change_listener is self:
            waypoint.set_change_listener(None)

        if self._listener is not None:
            self._listener.on_route_point_deleted(waypoint)
        if owned:
            self._update_active_time(target)

    # Change -------------------------------------------------------------

    def on_change(self, point: SpatialPoint) -> None:
        """Dispatch an edit of an owned entity and forward it to the listener."""

        if point.is_waypoint:
            self.on_route_point_changed(point)  # type: ignore[arg-type]
            if self._listener is not None:
                self._listener.on_route_point_changed(point)  # type: ignore[arg-type]
            return

        if point not in self._syncing:
            self.on_target_changed(point)  # type: ignore[arg-type]
        if self._listener is not None:
            self._listener.on_target_changed(point)  # type: ignore[arg-type]

    def on_target_changed(self, target: Target) -> None:
        """Replace the waypoints of an edited target, keeping their flight position.

        Subclasses can override this with a cheaper in-place update.
        """

        old_points = self.route_points_of(target)
        if old_points:
            index = min(self._route_points.index(waypoint) for waypoint in old_points)
        else:
            index = len(self._route_points)
        for waypoint in old_points:
            self.remove_route_point(waypoint)

        new_points = list(self.calculate_route_points_of(target))
        for offset, waypoint in enumerate(new_points):
            self._attach(target, waypoint)
            self.add_route_point(waypoint, index + offset)
        self._update_active_time(target)
        LOGGER.debug(
            "Re-derived %s waypoints of a target in %s technique",
            len(new_points),
            self.technique_name,
        )
        self._verify_if_enabled()

    def on_route_point_changed(self, waypoint: Waypoint) -> None:
        """Keep the associated target's active time in line with its waypoints."""

        target = waypoint.associated_target
        if target is not None and target in self._points_by_target:
            self._update_active_time(target)

    def refresh(self) -> None:
        """Re-derive the waypoints of every target, e.g. after a parameter change."""

        for target in list(self._targets):
            self.on_target_changed(target)

    def _parameters_changed(self) -> None:
        LOGGER.debug("Parameters of %s technique changed: %s", self.technique_name, self.parameters())
        if self._listener is not None:
            self._listener.on_technique_parameters_changed(self)

    # Bookkeeping --------------------------------------------------------

    def calculate_active_time_of(self, target: Target) -> float:
        """Time spent on ``target``: hover times plus travel between its waypoints.

        The travel time of the first waypoint is excluded, it is the travel
        into the target and already accounted for by the target itself.
        """

        waypoints = self.route_points_of(target)
        active_time = sum(waypoint.active_time for waypoint in waypoints)
        active_time += sum(waypoint.travel_time for waypoint in waypoints[1:])
        return active_time

    def _attach(self, target: Target, waypoint: Waypoint) -> None:
        waypoint.associated_target = target
        self._points_by_target[target].append(waypoint)

    @contextmanager
    def _syncing_target(self, target: Target) -> Iterator[None]:
        """Mark edits to ``target`` as bookkeeping so they do not re-derive waypoints."""

        nested = target in self._syncing
        self._syncing.add(target)
        try:
            yield
        finally:
            if not nested:
                self._syncing.discard(target)

    def _update_active_time(self, target: Target) -> None:
        active_time = self.calculate_active_time_of(target)
        with self._syncing_target(target):
            target.active_time = active_time

    def verify(self) -> None:
        """Raise ``InvariantViolation`` if the derived bookkeeping is inconsistent."""

        for target, waypoints in self._points_by_target.items():
            if target not in self._targets:
                raise InvariantViolation(f"{target!r} has waypoints but is not a target")
            for waypoint in waypoints:
                if waypoint not in self._route_points:
                    raise InvariantViolation(f"{waypoint!r} is mapped but not in the flight order")
                if waypoint.associated_target is not target:
                    raise InvariantViolation(f"{waypoint!r} is mapped to a different target")
            expected = self.calculate_active_time_of(target)
            if not math.isclose(target.active_time, expected, rel_tol=1e-9, abs_tol=1e-9):
                raise InvariantViolation(
                    f"Active time of {target!r} is {target.active_time}, expected {expected}"
                )
        for waypoint in self._route_points:
            target = waypoint.associated_target
            if target is None:
                continue
            if waypoint not in self._points_by_target.get(target, []):
                raise InvariantViolation(f"{waypoint!r} is not reachable from its target")

    def _verify_if_enabled(self) -> None:
        if self._verify_invariants:
            self.verify()

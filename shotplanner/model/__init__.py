"""Mini README: Entity model of a recording route.

Re-exports targets, waypoints and the listener interfaces that connect them
to techniques and routes.
"""

from .events import ChangeListener, MapChangeListener, TechniqueListener
from .point import SpatialPoint, Target
from .waypoint import Action, Waypoint

__all__ = [
    "Action",
    "ChangeListener",
    "MapChangeListener",
    "SpatialPoint",
    "Target",
    "TechniqueListener",
    "Waypoint",
]

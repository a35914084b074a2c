"""Mini README: Geodesy helpers consumed by the route model.

The package wraps the WGS84 solutions of geographiclib behind the three
operations the planner needs, so the rest of the code never handles
ellipsoid parameters directly.
"""

from .geodesy import (
    Coordinate,
    bearing_delta,
    destination_point,
    geodesic_distance,
    initial_bearing,
    normalise_bearing,
)

__all__ = [
    "Coordinate",
    "bearing_delta",
    "destination_point",
    "geodesic_distance",
    "initial_bearing",
    "normalise_bearing",
]

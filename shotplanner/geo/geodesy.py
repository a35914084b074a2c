"""Mini README: Ellipsoidal distance, bearing and offset calculations.

Structure:
    * Coordinate - immutable latitude/longitude pair in degrees.
    * geodesic_distance - length of the shortest path between two coordinates.
    * initial_bearing - forward azimuth at the first coordinate.
    * destination_point - coordinate reached after travelling along a heading.
    * normalise_bearing / bearing_delta - angle bookkeeping helpers.

All three geodesic operations solve the WGS84 problems through
``geographiclib`` so distances and headings are consistent with the units
used by the timing calculations downstream.
"""

from __future__ import annotations

from dataclasses import dataclass

from geographiclib.geodesic import Geodesic

_GEODESIC = Geodesic.WGS84


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude and longitude in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


def normalise_bearing(bearing: float) -> float:
    """Map any angle in degrees onto the range [0, 360)."""

    normalised = bearing % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if normalised >= 360.0 else normalised


def bearing_delta(first: float, second: float) -> float:
    """Return the smallest rotation, in degrees, between two bearings."""

    delta = abs(normalise_bearing(second) - normalise_bearing(first))
    return 360.0 - delta if delta > 180.0 else delta


def geodesic_distance(origin: Coordinate, destination: Coordinate) -> float:
    """Distance in meters between two coordinates over the WGS84 ellipsoid."""

    result = _GEODESIC.Inverse(
        origin.latitude, origin.longitude, destination.latitude, destination.longitude
    )
    return result["s12"]


def initial_bearing(origin: Coordinate, destination: Coordinate) -> float:
    """Bearing in degrees [0, 360) to follow from ``origin`` towards ``destination``.

    Coincident coordinates have no defined heading; 0 is returned for them.
    """

    if origin == destination:
        return 0.0
    result = _GEODESIC.Inverse(
        origin.latitude, origin.longitude, destination.latitude, destination.longitude
    )
    return normalise_bearing(result["azi1"])


def destination_point(origin: Coordinate, distance: float, heading: float) -> Coordinate:
    """Coordinate reached after travelling ``distance`` meters along ``heading`` degrees."""

    result = _GEODESIC.Direct(origin.latitude, origin.longitude, heading, distance)
    return Coordinate(latitude=result["lat2"], longitude=result["lon2"])

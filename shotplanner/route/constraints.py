"""Mini README: Physical flight limits applied to a recording route.

Structure:
    * Constraints - immutable value object with speed, angular rate and
      envelope limits. Invalid values fail at construction.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from ..errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Constraints:
    """Limits of the aircraft and of the area it may fly in.

    Speeds are in m/s, angular rates in degrees per second and heights in
    meters relative to the takeoff point. ``max_distance`` is the radius of
    the cylinder centred on the home point the aircraft must stay within.
    """

    max_speed: float
    max_pitch_speed: float
    max_bearing_speed: float
    min_height: float
    max_height: float
    max_distance: float

    def __post_init__(self) -> None:
        for name in ("max_speed", "max_pitch_speed", "max_bearing_speed", "max_distance"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.min_height > self.max_height:
            raise ConfigurationError(
                f"min_height ({self.min_height}) must not exceed max_height ({self.max_height})"
            )

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

"""Mini README: Centralised configuration models and helpers for shotplanner.

Structure:
    * ShotPlannerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables, pick the default
    flight constraints used when a route is built without explicit ones, and
    toggle how routes react to edits. The configuration is cached so the cost
    of validation is incurred only once per process.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .route.constraints import Constraints


class ShotPlannerSettings(BaseSettings):
    """Runtime configuration for the shot planner."""

    model_config = SettingsConfigDict(
        env_prefix="SHOTPLANNER_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by command line entry points.",
    )
    max_speed: float = Field(10.0, gt=0, description="Default maximum flight speed in m/s.")
    max_pitch_speed: float = Field(
        30.0, gt=0, description="Default maximum gimbal pitch rate in degrees per second."
    )
    max_bearing_speed: float = Field(
        60.0, gt=0, description="Default maximum yaw rate in degrees per second."
    )
    min_height: float = Field(0.0, description="Default minimum flight height over takeoff in meters.")
    max_height: float = Field(120.0, description="Default maximum flight height over takeoff in meters.")
    max_distance: float = Field(
        500.0, gt=0, description="Default radius around home the aircraft may travel, in meters."
    )
    auto_fix_actions: bool = Field(
        True,
        description="Re-run the recording action repair after every waypoint edit.",
    )
    recompute_on_parameter_change: bool = Field(
        False,
        description=(
            "Re-derive a technique's waypoints when one of its parameters changes."
            " Disabled by default so edits to several parameters can be batched."
        ),
    )
    verify_invariants: bool = Field(
        True,
        description="Check technique bookkeeping after every structural change.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        """Accept any casing of the standard logging level names."""

        level = str(value).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level '{value}'")
        return level

    def default_constraints(self) -> "Constraints":
        """Build the flight constraints described by these settings."""

        from .route.constraints import Constraints

        return Constraints(
            max_speed=self.max_speed,
            max_pitch_speed=self.max_pitch_speed,
            max_bearing_speed=self.max_bearing_speed,
            min_height=self.min_height,
            max_height=self.max_height,
            max_distance=self.max_distance,
        )


@lru_cache()
def get_settings() -> ShotPlannerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return ShotPlannerSettings()

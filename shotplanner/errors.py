"""Mini README: Error taxonomy shared by the shotplanner subsystems.

Structure:
    * ShotPlannerError - base class so callers can catch every planner error.
    * ConfigurationError - a constraint or technique parameter is out of range.
    * NotFoundError - an entity is not owned by the technique or route addressed.
    * InvariantViolation - internal bookkeeping was found inconsistent.

The first two double as ``ValueError`` and ``LookupError`` so code written
against the built-in exceptions keeps working. ``InvariantViolation`` signals
a programming error and is not meant to be recovered from.
"""

from __future__ import annotations


class ShotPlannerError(Exception):
    """Base class for every error raised by shotplanner."""


class ConfigurationError(ShotPlannerError, ValueError):
    """Raised when a physical parameter is outside its valid range."""


class NotFoundError(ShotPlannerError, LookupError):
    """Raised when a target or waypoint is not owned by the addressed container."""


class InvariantViolation(ShotPlannerError, RuntimeError):
    """Raised when derived state no longer matches the entities it was built from."""

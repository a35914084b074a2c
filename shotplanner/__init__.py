"""Mini README: Core package initializer for the shotplanner toolkit.

shotplanner turns points of interest into camera waypoints for a drone
recording flight. This module exposes convenience imports so callers can
reach the logging helpers without knowing the exact module structure; the
heavier subsystems live in ``model``, ``techniques`` and ``route``.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]

"""Mini README: Route aggregation subsystem.

Exports the flight constraints value object and the ``RecordingRoute`` that
combines techniques into a single flight sequence.
"""

from .constraints import Constraints
from .recording_route import ConstraintViolation, RecordingRoute

__all__ = ["ConstraintViolation", "Constraints", "RecordingRoute"]

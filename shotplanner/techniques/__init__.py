"""Mini README: Recording techniques subsystem.

Re-exports the abstract ``RecordingTechnique`` together with the built-in
shot patterns and the registry used to create them by name.
"""

from .base import RecordingTechnique
from .crane import CraneTechnique
from .overhead import OverheadTechnique
from .registry import REGISTRY, TechniqueRegistry

__all__ = [
    "CraneTechnique",
    "OverheadTechnique",
    "REGISTRY",
    "RecordingTechnique",
    "TechniqueRegistry",
]

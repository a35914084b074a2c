"""Mini README: Technique registry enabling lookup by name.

Structure:
    * TechniqueRegistry - manages registration and instantiation of
      ``RecordingTechnique`` implementations.

The command line and other front ends build techniques from user input
through the registry, so new shot patterns become available by registering
their class.
"""

from __future__ import annotations

from typing import Dict, Iterable, Type

from ..errors import ConfigurationError, NotFoundError
from ..logging_utils import get_logger
from .base import RecordingTechnique
from .crane import CraneTechnique
from .overhead import OverheadTechnique

LOGGER = get_logger(__name__)


class TechniqueRegistry:
    """Simple registry for mapping technique identifiers to classes."""

    def __init__(self) -> None:
        self._techniques: Dict[str, Type[RecordingTechnique]] = {}

    def register(self, technique: Type[RecordingTechnique]) -> None:
        """Register a new technique class with the registry."""

        identifier = technique.technique_name.lower()
        LOGGER.debug("Registering technique '%s'", identifier)
        self._techniques[identifier] = technique

    def available_techniques(self) -> Iterable[str]:
        """Return iterable of technique identifiers for display."""

        return sorted(self._techniques.keys())

    def create(self, identifier: str, **parameters: object) -> RecordingTechnique:
        """Instantiate a technique matching the identifier with ``parameters``."""

        technique_cls = self._techniques.get(identifier.lower())
        if not technique_cls:
            raise NotFoundError(f"Unknown recording technique '{identifier}'")
        LOGGER.info("Creating technique '%s' with %s", identifier, parameters)
        try:
            return technique_cls(**parameters)
        except TypeError as error:
            raise ConfigurationError(f"Invalid parameters for '{identifier}': {error}") from error


REGISTRY = TechniqueRegistry()
REGISTRY.register(CraneTechnique)
REGISTRY.register(OverheadTechnique)

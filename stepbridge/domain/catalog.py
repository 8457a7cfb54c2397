"""Catalog of step definitions for one process run."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from stepbridge.domain.exceptions import DuplicateStepDefinitionError, UnknownStepError
from stepbridge.domain.step_definition import StepDefinition
from stepbridge.shared.result import Err, Ok, Result

if TYPE_CHECKING:
    from stepbridge.domain.protocols import StepLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepMatch:
    """A step definition whose pattern matched some step text."""

    definition: StepDefinition
    arguments: tuple[str, ...]


class Catalog:
    """Read-only, ordered collection of step definitions indexed by identifier.

    The catalog is built once and never mutated afterwards, so lookups need
    no locking when requests are processed concurrently.
    """

    def __init__(self, definitions: Iterable[StepDefinition]):
        """Initialize catalog.

        Args:
            definitions: Step definitions in discovery order

        Raises:
            DuplicateStepDefinitionError: If two definitions share an identifier
        """
        ordered = tuple(definitions)
        by_id: dict[str, StepDefinition] = {}
        for definition in ordered:
            if definition.identifier in by_id:
                raise DuplicateStepDefinitionError(
                    definition.identifier, definition.name, definition.pattern.pattern
                )
            by_id[definition.identifier] = definition

        self._definitions = ordered
        self._by_id = MappingProxyType(by_id)

    @classmethod
    def from_loader(cls, loader: "StepLoader") -> "Catalog":
        """Build the catalog from a loader's definitions."""
        catalog = cls(loader.load())
        logger.info(f"Loaded {len(catalog)} step definition(s)")
        return catalog

    def get(self, identifier: str) -> StepDefinition | None:
        return self._by_id.get(identifier)

    def lookup(self, identifier: str) -> Result[StepDefinition, UnknownStepError]:
        """Find a definition by identifier.

        Returns:
            Ok(StepDefinition) or Err(UnknownStepError)
        """
        definition = self._by_id.get(identifier)
        if definition is None:
            return Err(UnknownStepError(identifier))
        return Ok(definition)

    def find_matches(self, text: str) -> list[StepMatch]:
        """Return every definition whose pattern matches ``text``, in order."""
        return [
            StepMatch(definition, definition.capture_groups(text))
            for definition in self._definitions
            if definition.matches(text)
        ]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._by_id

    def __iter__(self) -> Iterator[StepDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"Catalog({len(self._definitions)} step definition(s))"

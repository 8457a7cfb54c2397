"""Serialization of the catalog for ``list_step_definitions``."""

from collections.abc import Iterable

from pydantic import TypeAdapter

from stepbridge.domain.models import StepDefinitionEntry
from stepbridge.domain.step_definition import StepDefinition

_ENTRY_LIST = TypeAdapter(list[StepDefinitionEntry])


class Formatter:
    """Renders step definitions as a compact JSON array of ``{pattern, id}``."""

    def format(self, definitions: Iterable[StepDefinition]) -> str:
        """Serialize definitions in iteration order.

        Args:
            definitions: A Catalog or any sequence of step definitions

        Returns:
            JSON text such as ``[{"pattern":"^foo$","id":"..."}]``
        """
        entries = [
            StepDefinitionEntry(pattern=definition.pattern.pattern, id=definition.identifier)
            for definition in definitions
        ]
        return _ENTRY_LIST.dump_json(entries).decode("utf-8")

"""Protocol definitions for dependency inversion.

The catalog depends on this abstraction rather than on any particular way
of discovering step definitions.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from stepbridge.domain.step_definition import StepDefinition


class StepLoader(Protocol):
    """Protocol for supplying the step definitions of one run."""

    def load(self) -> list["StepDefinition"]:
        """Return every step definition, in discovery order.

        Returns:
            Step definitions; order is preserved in ``list_step_definitions``

        Raises:
            StepDefinitionError: If a discovered callable is not a valid step
        """
        ...

"""Step loaders.

``StaticLoader`` serves a list built elsewhere. ``NamespaceLoader`` collects
decorated callables from modules or classes that are already imported; it
never imports code itself.
"""

import inspect
import logging
from collections.abc import Callable, Iterable
from types import ModuleType
from typing import Any

from stepbridge.domain.decorators import step_patterns
from stepbridge.domain.exceptions import StepDefinitionError
from stepbridge.domain.step_definition import StepDefinition
from stepbridge.shared.naming import qualified_name

logger = logging.getLogger(__name__)


class StaticLoader:
    """Loader returning a fixed sequence of step definitions."""

    def __init__(self, definitions: Iterable[StepDefinition]):
        self._definitions = list(definitions)

    def load(self) -> list[StepDefinition]:
        return list(self._definitions)


class NamespaceLoader:
    """Collect decorated step callables from modules and classes.

    Namespaces are scanned in the order given and members in definition
    order. For a module, only functions defined in that module are
    collected, so a step imported from elsewhere is not picked up twice.
    For a class, static methods and class methods are collected; instance
    methods cannot be invoked without an instance and are rejected.
    """

    def __init__(self, *namespaces: ModuleType | type):
        self._namespaces = namespaces

    def load(self) -> list[StepDefinition]:
        """Build one step definition per attached pattern.

        Raises:
            StepDefinitionError: If a decorated member is an instance method
                or has an invalid pattern or signature
        """
        definitions: list[StepDefinition] = []
        for namespace in self._namespaces:
            found = [
                StepDefinition.from_callable(function, pattern)
                for function in self._members(namespace)
                for pattern in step_patterns(function)
            ]
            logger.debug(
                f"Found {len(found)} step definition(s) in {namespace.__name__}"
            )
            definitions.extend(found)
        return definitions

    def _members(self, namespace: ModuleType | type) -> list[Callable[..., Any]]:
        if isinstance(namespace, ModuleType):
            return [
                member
                for member in vars(namespace).values()
                if inspect.isfunction(member)
                and member.__module__ == namespace.__name__
                and step_patterns(member)
            ]

        members: list[Callable[..., Any]] = []
        for attribute, raw in vars(namespace).items():
            if not step_patterns(raw):
                continue
            if isinstance(raw, (staticmethod, classmethod)):
                members.append(getattr(namespace, attribute))
            else:
                raise StepDefinitionError(
                    f"{qualified_name(namespace)}.{attribute} is an instance method; "
                    "declare step methods as staticmethod or classmethod"
                )
        return members

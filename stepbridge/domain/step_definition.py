"""Step definitions: pattern-matched callables invocable by identifier."""

import functools
import hashlib
import inspect
import logging
import re
import typing
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from stepbridge.domain.decorators import step_patterns
from stepbridge.domain.exceptions import StepDefinitionError
from stepbridge.shared.naming import qualified_name

logger = logging.getLogger(__name__)

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class StepDefinition:
    """One step definition: a compiled pattern bound to a callable.

    Instances are immutable. The identifier is derived from the callable's
    qualified name, its parameter types and the pattern text, so building a
    definition twice from the same callable and pattern yields equal objects
    with the same identifier across processes.
    """

    __slots__ = ("_function", "_pattern", "_parameter_types", "_name", "_identifier")

    def __init__(
        self,
        function: Callable[..., Any],
        pattern: str | re.Pattern[str],
        parameter_types: Iterable[type],
        name: str | None = None,
    ):
        """Initialize step definition.

        Args:
            function: Callable invoked with coerced positional arguments
            pattern: Regular expression (source text or compiled)
            parameter_types: Declared type of each positional parameter, in order
            name: Qualified name used for the identifier (default: derived
                from ``function``)

        Raises:
            StepDefinitionError: If the pattern is not a valid regular expression,
                the callable is asynchronous or it has no stable name
        """
        self._function = function
        self._pattern = _compile(pattern)
        self._parameter_types = tuple(parameter_types)
        _reject_async(function)
        self._name = name or _callable_name(function)
        self._identifier = _derive_identifier(
            self._name, self._parameter_types, self._pattern.pattern
        )

    @classmethod
    def from_callable(
        cls, function: Callable[..., Any], pattern: str | re.Pattern[str] | None = None
    ) -> "StepDefinition":
        """Build a step definition from a plain Python callable.

        Parameter types are read from the callable's annotations; parameters
        without an annotation are treated as strings.

        Args:
            function: Function, static method or bound method
            pattern: Pattern to use; defaults to the single pattern attached
                with a step decorator

        Returns:
            New StepDefinition

        Raises:
            StepDefinitionError: If no single pattern is available or the
                signature has parameters that cannot be passed positionally,
                or the callable is asynchronous
        """
        name = _callable_name(function)
        _reject_async(function)
        if pattern is None:
            patterns = step_patterns(function)
            if len(patterns) != 1:
                raise StepDefinitionError(
                    f"{name} has {len(patterns)} step pattern(s); pass one explicitly"
                )
            pattern = patterns[0]
        return cls(function, pattern, _resolve_parameter_types(function, name), name=name)

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def name(self) -> str:
        return self._name

    @property
    def pattern(self) -> re.Pattern[str]:
        return self._pattern

    @property
    def parameter_types(self) -> tuple[type, ...]:
        return self._parameter_types

    @property
    def arity(self) -> int:
        """Number of positional arguments the callable expects."""
        return len(self._parameter_types)

    @property
    def function(self) -> Callable[..., Any]:
        return self._function

    def matches(self, text: str) -> bool:
        """Check whether the pattern matches the whole of ``text``."""
        return self._pattern.fullmatch(text) is not None

    def capture_groups(self, text: str) -> tuple[str, ...]:
        """Return the capture groups for ``text``, left to right.

        Returns an empty tuple when the pattern does not match. Optional
        groups that did not participate in the match are returned as ``""``.
        """
        match = self._pattern.fullmatch(text)
        if match is None:
            return ()
        return match.groups(default="")

    def invoke(self, args: Sequence[Any]) -> Any:
        """Call the underlying callable with ``args`` positionally.

        Arity is not checked here; exceptions raised by the callable
        propagate unchanged.
        """
        return self._function(*args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepDefinition):
            return NotImplemented
        return self._identifier == other._identifier

    def __hash__(self) -> int:
        return hash(self._identifier)

    def __repr__(self) -> str:
        return (
            f"StepDefinition(name={self._name!r}, pattern={self._pattern.pattern!r}, "
            f"id={self._identifier!r})"
        )


def _compile(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise StepDefinitionError(f"Invalid step pattern '{pattern}': {e}") from e


def _derive_identifier(name: str, parameter_types: tuple[type, ...], pattern: str) -> str:
    try:
        type_names = ",".join(qualified_name(t) for t in parameter_types)
    except TypeError as e:
        raise StepDefinitionError(f"{name}: unsupported parameter type: {e}") from e
    key = f"{name}|{type_names}|{pattern}"
    return hashlib.sha1(key.encode("utf-8")).hexdigest()


def _resolve_parameter_types(function: Callable[..., Any], name: str) -> tuple[type, ...]:
    target = function if inspect.isroutine(function) else getattr(function, "__call__", function)
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError) as e:
        raise StepDefinitionError(f"Cannot inspect signature of {name}: {e}") from e

    try:
        hints = typing.get_type_hints(target)
    except (NameError, TypeError) as e:
        raise StepDefinitionError(f"Cannot resolve type hints of {name}: {e}") from e

    types: list[type] = []
    for parameter in signature.parameters.values():
        if parameter.kind not in _POSITIONAL_KINDS:
            raise StepDefinitionError(
                f"{name}: parameter '{parameter.name}' cannot be passed positionally"
            )
        types.append(hints.get(parameter.name, str))

    logger.debug(f"Resolved parameter types for {name}: {types}")
    return tuple(types)


def _callable_name(function: Callable[..., Any]) -> str:
    target = getattr(function, "__func__", function)
    if isinstance(target, functools.partial):
        raise StepDefinitionError(
            f"functools.partial of {_callable_name(target.func)} cannot be a step "
            "definition; wrap it in a function"
        )
    try:
        if inspect.isroutine(target) or inspect.isclass(target):
            return qualified_name(target)
        # Callable instances are named after their class
        return f"{qualified_name(type(target))}.__call__"
    except TypeError as e:
        raise StepDefinitionError(str(e)) from e


def _reject_async(function: Callable[..., Any]) -> None:
    target = getattr(function, "__func__", function)
    if not inspect.isroutine(target) and not inspect.isclass(target):
        target = getattr(type(target), "__call__", target)
    if inspect.iscoroutinefunction(target) or inspect.isasyncgenfunction(target):
        raise StepDefinitionError(
            f"{_callable_name(function)} is asynchronous; step definitions must be "
            "plain callables"
        )

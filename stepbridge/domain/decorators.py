"""Decorators that mark plain callables as step definitions.

The decorators only record patterns on the function; nothing is registered
globally. ``NamespaceLoader`` later collects marked callables from the
modules and classes it is given.

Example:
    >>> @given(r"^I have (\\d+) cukes in my belly$")
    ... def cukes(count: int) -> None:
    ...     ...
"""

from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

STEP_PATTERNS_ATTR = "__step_patterns__"


def step(pattern: str) -> Callable[[F], F]:
    """Attach a step pattern to a callable.

    A callable may be decorated more than once; each pattern yields its own
    step definition, in the order the decorators are written.

    Args:
        pattern: Regular expression matched against step text

    Returns:
        Decorator returning the callable unchanged apart from the marker
    """

    def decorator(func: F) -> F:
        target = getattr(func, "__func__", func)
        # Decorators apply bottom-up; prepend to keep top-down reading order
        existing = getattr(target, STEP_PATTERNS_ATTR, ())
        setattr(target, STEP_PATTERNS_ATTR, (pattern,) + tuple(existing))
        return func

    return decorator


# Keywords are interchangeable when matching; they only help readability.
given = step
when = step
then = step


def step_patterns(func: Callable[..., Any]) -> tuple[str, ...]:
    """Return the patterns attached to ``func`` (empty if undecorated)."""
    target = getattr(func, "__func__", func)
    return tuple(getattr(target, STEP_PATTERNS_ATTR, ()))

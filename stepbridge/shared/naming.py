"""Stable display names for Python objects."""

from typing import Any


def qualified_name(obj: Any) -> str:
    """Return ``module.QualName`` for a class or function.

    Builtins are reported without the ``builtins.`` prefix, so ``int`` is
    ``"int"`` and ``ValueError`` is ``"ValueError"``. Parameterized generics
    (``list[int]``, ``Optional[str]``) and other typing constructs without a
    ``__qualname__`` fall back to their ``repr``.

    Raises:
        TypeError: If ``obj`` has no name of its own, i.e. its only textual
            form is the default ``<... object at 0x...>`` repr
    """
    # list[int] forwards __qualname__ to list, which would lose the arguments
    if getattr(obj, "__origin__", None) is not None:
        return repr(obj)
    qualname = getattr(obj, "__qualname__", None)
    if qualname is None:
        if type(obj).__repr__ is object.__repr__:
            raise TypeError(
                f"{type(obj).__qualname__} instance has no stable qualified name"
            )
        return repr(obj)
    module = getattr(obj, "__module__", None)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"

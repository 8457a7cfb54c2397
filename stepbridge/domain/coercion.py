"""Argument coercion.

Converts raw step arguments (capture group text, or scalars from the JSON
request) into the types a step definition declares. Integer, floating-point
and string parameters are supported out of the box; other types can be
added with ``ArgumentCoercer.register``.
"""

import json
import logging
import math
import re
from collections.abc import Callable, Sequence
from typing import Any

from stepbridge.domain.exceptions import CoercionError
from stepbridge.shared.naming import qualified_name
from stepbridge.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

Converter = Callable[[Any], Any]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _unsupported(value: Any, target: str) -> CoercionError:
    try:
        rendered = json.dumps(value)
    except (TypeError, ValueError):
        rendered = repr(value)
    return CoercionError(f"Cannot convert {_json_type(value)} value {rendered} to {target}")


def to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise _unsupported(value, "str")


def to_int(value: Any) -> int:
    """Parse a base-10 signed integer within the 64-bit range."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise _unsupported(value, "int")

    if isinstance(value, str):
        if _INTEGER_RE.fullmatch(value) is None:
            raise CoercionError(f"invalid literal for int() with base 10: {value!r}")
        result = int(value)
    else:
        result = value

    if not INT64_MIN <= result <= INT64_MAX:
        raise CoercionError(f"Value '{value}' is out of range for a 64-bit integer")
    return result


def to_float(value: Any) -> float:
    """Parse a finite decimal floating-point value (no nan/inf spellings)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise _unsupported(value, "float")

    if isinstance(value, str) and _FLOAT_RE.fullmatch(value) is None:
        raise CoercionError(f"could not convert string to float: {value!r}")

    try:
        result = float(value)
    except OverflowError:
        result = math.inf
    if not math.isfinite(result):
        raise CoercionError(f"Value '{value}' is out of range for a 64-bit float")
    return result


class ArgumentCoercer:
    """Converts raw arguments to declared parameter types, positionally."""

    def __init__(self) -> None:
        self._converters: dict[Any, Converter] = {
            str: to_str,
            int: to_int,
            float: to_float,
        }

    def register(self, target_type: Any, converter: Converter) -> None:
        """Add or replace the converter for ``target_type``.

        Converters receive the raw value (usually a string) and either return
        the converted value or raise. Any exception other than
        ``CoercionError`` is wrapped into one carrying its message. Register
        converters before the coercer is shared between threads.
        """
        self._converters[target_type] = converter
        logger.debug(f"Registered converter for {qualified_name(target_type)}")

    def supports(self, target_type: Any) -> bool:
        return target_type in self._converters

    def coerce(self, value: Any, target_type: Any) -> Any:
        """Convert one value.

        Raises:
            CoercionError: If the value cannot be converted or no converter
                is registered for ``target_type``
        """
        converter = self._converters.get(target_type)
        if converter is None:
            raise CoercionError(
                f"No converter registered for parameter type '{qualified_name(target_type)}'"
            )
        try:
            return converter(value)
        except CoercionError:
            raise
        except Exception as e:
            raise CoercionError(str(e) or qualified_name(type(e))) from e

    def coerce_all(
        self, values: Sequence[Any], parameter_types: Sequence[Any]
    ) -> Result[tuple[Any, ...], CoercionError]:
        """Convert ``values[i]`` to ``parameter_types[i]`` left to right.

        Stops at the first failure. Callers check that both sequences have
        the same length.

        Returns:
            Ok(tuple of converted values) or Err(CoercionError)
        """
        coerced = []
        for value, target_type in zip(values, parameter_types):
            try:
                coerced.append(self.coerce(value, target_type))
            except CoercionError as e:
                return Err(e)
        return Ok(tuple(coerced))

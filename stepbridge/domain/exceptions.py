"""
Bridge exception hierarchy.

Two families live here:

- ``RequestError`` subclasses describe why a single protocol request could
  not be served. They are carried inside ``Err`` results through the
  request pipeline and rendered as ``FAIL:`` responses; they never escape
  ``Processor.process``.
- ``StepDefinitionError`` subclasses are raised while building step
  definitions or a catalog, before any request is served.
"""

import traceback
from enum import Enum

from stepbridge.shared.naming import qualified_name


class FailureKind(str, Enum):
    """Closed set of request failure categories."""

    UNRECOGNIZED_REQUEST = "UnrecognizedRequest"
    MALFORMED_JSON = "MalformedJson"
    MISSING_FIELD = "MissingField"
    UNKNOWN_STEP = "UnknownStep"
    ARITY_MISMATCH = "ArityMismatch"
    COERCION_ERROR = "CoercionError"
    INVOCATION_ERROR = "InvocationError"


class StepBridgeError(Exception):
    """Base exception for all bridge errors."""
    pass


class RequestError(StepBridgeError):
    """Base exception for failures reported back to the caller."""

    kind: FailureKind

    @property
    def message(self) -> str:
        """Message sent in the ``message`` field of the failure response."""
        return str(self)


class UnrecognizedRequestError(RequestError):
    """Raised when a request line matches no known request shape."""

    kind = FailureKind.UNRECOGNIZED_REQUEST

    def __init__(self, raw_request: str):
        super().__init__(f"Invalid request '{raw_request}'")
        self.raw_request = raw_request


class MalformedJsonError(RequestError):
    """Raised when an invoke payload is not a valid JSON request object."""

    kind = FailureKind.MALFORMED_JSON

    def __init__(self, raw_request: str, detail: str):
        super().__init__(f"Invalid json in request '{raw_request}': {detail}")
        self.raw_request = raw_request
        self.detail = detail


class MissingFieldError(RequestError):
    """Raised when a required request field is absent."""

    kind = FailureKind.MISSING_FIELD

    def __init__(self, field: str):
        super().__init__(f"Missing '{field}' in request")
        self.field = field


class UnknownStepError(RequestError):
    """Raised when no step definition has the requested id."""

    kind = FailureKind.UNKNOWN_STEP

    def __init__(self, step_id: str):
        super().__init__(f"Could not find step with id '{step_id}'")
        self.step_id = step_id


class ArityMismatchError(RequestError):
    """Raised when the argument count differs from the step's parameter count."""

    kind = FailureKind.ARITY_MISMATCH

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} argument(s); got {actual}")
        self.expected = expected
        self.actual = actual


class CoercionError(RequestError):
    """Raised when an argument cannot be converted to its parameter type."""

    kind = FailureKind.COERCION_ERROR


class InvocationError(RequestError):
    """
    A step definition raised while it was being invoked.

    Attributes:
        exception_name: Qualified name of the raised exception's class
        backtrace: Formatted traceback of the raised exception
    """

    kind = FailureKind.INVOCATION_ERROR

    def __init__(self, message: str, exception_name: str, backtrace: str):
        super().__init__(message)
        self.exception_name = exception_name
        self.backtrace = backtrace

    @classmethod
    def from_exception(
        cls, error: Exception, backtrace_limit: int | None = None
    ) -> "InvocationError":
        """Capture a step's exception as data.

        Args:
            error: Exception raised by the step callable
            backtrace_limit: Maximum number of traceback frames to keep,
                counted from the frame that raised

        Returns:
            InvocationError carrying the message, category and backtrace
        """
        exception_name = qualified_name(type(error))
        backtrace = "".join(
            traceback.format_exception(
                type(error),
                error,
                error.__traceback__,
                limit=-backtrace_limit if backtrace_limit else None,
            )
        )
        try:
            message = str(error) or exception_name
        except Exception:
            # __str__ itself raised
            message = exception_name
        invocation_error = cls(message, exception_name, backtrace)
        invocation_error.__cause__ = error
        return invocation_error


class StepDefinitionError(StepBridgeError):
    """Raised when a callable cannot be turned into a step definition."""
    pass


class DuplicateStepDefinitionError(StepDefinitionError):
    """Raised when two step definitions in one catalog share an identifier."""

    def __init__(self, identifier: str, name: str, pattern: str):
        super().__init__(
            f"Step definition {name} with pattern '{pattern}' is already "
            f"registered (id '{identifier}')"
        )
        self.identifier = identifier
        self.name = name
        self.pattern = pattern

"""Request processor: the wire protocol state machine.

Turns one raw request line into one response line:

1. Parse the request (``list_step_definitions`` or ``invoke:<json>``)
2. For invoke requests: look up the step, check arity, coerce arguments
3. Invoke the step and render ``OK`` or ``FAIL:<json>``

Every stage returns a Result; failures are rendered as ``FAIL:`` responses
and never raised to the caller.
"""

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from stepbridge.application.formatter import Formatter
from stepbridge.domain.coercion import ArgumentCoercer
from stepbridge.domain.exceptions import (
    ArityMismatchError,
    InvocationError,
    MalformedJsonError,
    MissingFieldError,
    RequestError,
    UnrecognizedRequestError,
)
from stepbridge.domain.models import (
    FailureResponse,
    InvokePayload,
    InvokeRequest,
    ListRequest,
    Request,
)
from stepbridge.domain.step_definition import StepDefinition
from stepbridge.shared.result import Err, Ok, Result

if TYPE_CHECKING:
    from stepbridge.domain.catalog import Catalog
    from stepbridge.shared.config import Settings

logger = logging.getLogger(__name__)

LIST_REQUEST = "list_step_definitions"
INVOKE_PREFIX = "invoke:"
OK_RESPONSE = "OK"
FAIL_PREFIX = "FAIL:"


class Processor:
    """Processes wire protocol requests against a catalog.

    The processor holds no per-request state, so ``process`` may be called
    from several threads at once. Thread safety of the step callables
    themselves is up to the step authors.
    """

    def __init__(
        self,
        catalog: "Catalog",
        coercer: ArgumentCoercer | None = None,
        formatter: Formatter | None = None,
        settings: "Settings | None" = None,
    ):
        """Initialize processor.

        Args:
            catalog: Step definitions available to invoke requests
            coercer: Argument coercer (default: integer/float/string support)
            formatter: Catalog formatter for list requests
            settings: Bridge settings (backtrace limit, request logging)
        """
        self.catalog = catalog
        self.coercer = coercer or ArgumentCoercer()
        self.formatter = formatter or Formatter()
        self.backtrace_limit = settings.backtrace_limit if settings else None
        self.log_requests = settings.log_requests if settings else False

    def process(self, raw_request: str) -> str:
        """Process one request line.

        Args:
            raw_request: Request text without the line terminator

        Returns:
            Catalog JSON for list requests, ``OK`` for successful invocations,
            or ``FAIL:`` followed by a JSON failure object
        """
        if self.log_requests:
            logger.debug(f"Processing request: {raw_request}")

        match self.parse(raw_request).and_then(self._dispatch):
            case Err(error):
                return self._render_failure(error)
            case Ok(response):
                return response

    def parse(self, raw_request: str) -> Result[Request, RequestError]:
        """Parse a raw request line into a typed request.

        Returns:
            Ok(ListRequest | InvokeRequest) or Err(RequestError)
        """
        if raw_request == LIST_REQUEST:
            return Ok(ListRequest())
        if raw_request.startswith(INVOKE_PREFIX):
            return self._parse_invoke(raw_request, raw_request[len(INVOKE_PREFIX):])
        return Err(UnrecognizedRequestError(raw_request))

    def _parse_invoke(
        self, raw_request: str, payload: str
    ) -> Result[InvokeRequest, RequestError]:
        try:
            parsed = InvokePayload.model_validate_json(payload)
        except ValidationError as e:
            errors = e.errors(include_url=False)
            for error in errors:
                if error["type"] == "json_invalid":
                    return Err(MalformedJsonError(raw_request, error["msg"]))
            if any(error["loc"][:1] == ("id",) for error in errors):
                return Err(MissingFieldError("id"))
            return Err(MalformedJsonError(raw_request, _describe_errors(errors)))

        if parsed.id is None:
            return Err(MissingFieldError("id"))
        return Ok(InvokeRequest(id=parsed.id, args=tuple(parsed.args or ())))

    def _dispatch(self, request: Request) -> Result[str, RequestError]:
        if isinstance(request, ListRequest):
            return Ok(self.formatter.format(self.catalog))
        return self.invoke(request).map(lambda _: OK_RESPONSE)

    def invoke(self, request: InvokeRequest) -> Result[Any, RequestError]:
        """Run the invoke path for an already parsed request.

        Returns:
            Ok(value returned by the step) or Err(RequestError)
        """
        match self.catalog.lookup(request.id):
            case Err(error):
                return Err(error)
            case Ok(definition):
                pass

        if len(request.args) != definition.arity:
            return Err(ArityMismatchError(definition.arity, len(request.args)))

        match self.coercer.coerce_all(request.args, definition.parameter_types):
            case Err(error):
                return Err(error)
            case Ok(arguments):
                return self._call(definition, arguments)

    def _call(
        self, definition: StepDefinition, arguments: tuple[Any, ...]
    ) -> Result[Any, InvocationError]:
        logger.debug(f"Invoking {definition.name} with {len(arguments)} argument(s)")
        try:
            value = definition.invoke(arguments)
        except Exception as e:
            return Err(InvocationError.from_exception(e, self.backtrace_limit))
        return Ok(value)

    def _render_failure(self, error: RequestError) -> str:
        if isinstance(error, InvocationError):
            logger.error(
                f"Step raised {error.exception_name}: {error.message}"
            )
            response = FailureResponse(
                message=error.message,
                exception=error.exception_name,
                backtrace=error.backtrace,
            )
        else:
            logger.warning(f"{error.kind.value}: {error.message}")
            response = FailureResponse(message=error.message)
        return FAIL_PREFIX + response.model_dump_json(exclude_none=True)


def _describe_errors(errors: list[Any]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)

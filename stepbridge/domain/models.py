"""Wire protocol models.

Requests and responses are parsed into and rendered from Pydantic models so
every field is validated for presence and type before the request pipeline
looks at it.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr

# ============================================================================
# Requests
# ============================================================================


class ListRequest(BaseModel):
    """``list_step_definitions``: enumerate the catalog."""

    model_config = ConfigDict(frozen=True)


class InvokePayload(BaseModel):
    """JSON object following ``invoke:``.

    ``id`` is optional at this level so that its absence can be reported as
    a missing field rather than a generic validation error. Unknown fields
    are ignored.
    """

    id: StrictStr | None = Field(default=None, description="Identifier of the step to invoke")
    args: list[Any] | None = Field(
        default=None, description="Positional arguments (strings or JSON scalars)"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


class InvokeRequest(BaseModel):
    """``invoke:``: run one step definition with positional arguments."""

    id: str = Field(description="Identifier of the step to invoke")
    args: tuple[Any, ...] = Field(default=(), description="Raw positional arguments")

    model_config = ConfigDict(frozen=True)


Request = Union[ListRequest, InvokeRequest]


# ============================================================================
# Responses
# ============================================================================


class StepDefinitionEntry(BaseModel):
    """One element of the ``list_step_definitions`` response."""

    pattern: str = Field(description="Source text of the step's regular expression")
    id: str = Field(description="Stable identifier used by invoke requests")

    model_config = ConfigDict(frozen=True)


class FailureResponse(BaseModel):
    """Body of a ``FAIL:`` response.

    ``exception`` and ``backtrace`` are only set for invocation errors and are
    omitted from the wire form otherwise.
    """

    message: str = Field(description="Human-readable failure message")
    exception: str | None = Field(
        default=None, description="Qualified class name of the exception raised by the step"
    )
    backtrace: str | None = Field(
        default=None, description="Formatted traceback of the exception raised by the step"
    )

    model_config = ConfigDict(frozen=True)

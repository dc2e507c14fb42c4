"""Transport-agnostic response envelopes."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import InvocationResult
from ...exceptions import (
    ContractViolationError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
)

# Suggested status codes for HTTP-style transports. The core never uses them itself.
HTTP_STATUS_BY_CODE: Dict[str, int] = {
    ToolNotFoundError.code: 404,
    ToolValidationError.code: 422,
    ToolExecutionError.code: 500,
    ContractViolationError.code: 500,
}


def http_status_for(code: str) -> int:
    return HTTP_STATUS_BY_CODE.get(code, 500)


class TextContent(BaseModel):
    """A plain-text content block."""

    type: Literal["text"] = "text"
    text: str


class Violation(BaseModel):
    """One violated field of a contract."""

    field: str
    message: str
    type: str


class ErrorInfo(BaseModel):
    """
    Machine-readable description of a failed invocation.

    Attributes:
        code: Stable error kind, e.g. ``unknown_tool`` or ``validation_failed``.
        message: Caller-safe summary.
        violations: Every violated field, present only for validation failures.
    """

    code: str
    message: str
    violations: Optional[List[Violation]] = None


class ToolResponse(BaseModel):
    """
    Envelope handed back to a transport for every invocation.

    On success ``structured_content`` holds the result and ``content`` its
    canonical text rendering. On failure ``is_error`` is set, ``error``
    describes the failure and ``content`` carries the message as text.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    structured_content: Optional[Dict[str, Any]] = Field(default=None, alias="structuredContent")
    is_error: bool = Field(default=False, alias="isError")
    error: Optional[ErrorInfo] = None

    def to_wire(self) -> Dict[str, Any]:
        """Dump the envelope with its wire field names, leaving out empty parts."""
        return self.model_dump(by_alias=True, exclude_none=True)


def success_envelope(result: InvocationResult) -> ToolResponse:
    return ToolResponse(
        content=[TextContent(text=result.textual)],
        structured_content=result.structured,
        is_error=False,
    )


def error_envelope(error: ToolError) -> ToolResponse:
    """Convert a dispatch error into an error envelope.

    Validation failures list their violations in the text block as well, so
    text-only clients can still correct every field in one round trip.
    """
    violations = None
    text = error.message
    if isinstance(error, ToolValidationError):
        violations = [Violation(**v) for v in error.violations]
        details = "\n".join(f"- {v.field}: {v.message}" for v in violations)
        if details:
            text = f"{text}\n{details}"

    return ToolResponse(
        content=[TextContent(text=text)],
        is_error=True,
        error=ErrorInfo(code=error.code, message=error.message, violations=violations),
    )

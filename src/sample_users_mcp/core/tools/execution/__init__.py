"""Tool invocation and response packaging."""

from .dispatcher import ToolDispatcher, InvocationStage, UnknownFieldPolicy
from .envelope import ToolResponse, TextContent, ErrorInfo, Violation, error_envelope, success_envelope, http_status_for

__all__ = [
    "ToolDispatcher",
    "InvocationStage",
    "UnknownFieldPolicy",
    "ToolResponse",
    "TextContent",
    "ErrorInfo",
    "Violation",
    "error_envelope",
    "success_envelope",
    "http_status_for",
]

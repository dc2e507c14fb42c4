"""
Custom exception classes for the tool dispatch system.

This module defines a hierarchy of exceptions used to handle errors during
tool registration, lookup, argument validation, execution and result
validation. Every error that can reach a caller carries a stable ``code`` so a
transport can map it to its own signalling without inspecting internals.
"""

from typing import Any, Dict, List, Optional


class ToolError(Exception):
    """Base exception for all tool-related errors.

    Attributes:
        code: Stable error kind, shared by all instances of a class.
        tool_name: The tool involved, when known.
        stage: For dispatch errors, the last invocation stage reached before failing.
    """

    code = "tool_error"

    def __init__(self, message: str, *, tool_name: Optional[str] = None, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.tool_name = tool_name
        self.stage = stage


class ToolRegistrationError(ToolError):
    """Raised when there is an error registering a tool."""

    code = "registration_error"


class DuplicateToolError(ToolRegistrationError):
    """Raised when a tool name is already taken in the registry."""

    code = "duplicate_name"


class InvalidToolDefinitionError(ToolRegistrationError):
    """Raised when a tool definition or one of its contracts is malformed."""

    code = "invalid_definition"


class ToolNotFoundError(ToolError):
    """Raised when a requested tool is not found in the registry."""

    code = "unknown_tool"


class ToolValidationError(ToolError):
    """Raised when call arguments violate a tool's input contract.

    Attributes:
        violations: One entry per violated field, each with ``field``, ``message`` and ``type``.
    """

    code = "validation_failed"

    def __init__(
        self,
        message: str,
        *,
        violations: Optional[List[Dict[str, Any]]] = None,
        tool_name: Optional[str] = None,
        stage: Optional[str] = None,
    ) -> None:
        super().__init__(message, tool_name=tool_name, stage=stage)
        self.violations = violations or []


class ToolExecutionError(ToolError):
    """Raised when a tool fails during execution."""

    code = "tool_execution_error"


class ContractViolationError(ToolError):
    """Raised when a tool returns a value that breaks its own output contract."""

    code = "contract_violation"

    def __init__(
        self,
        message: str,
        *,
        violations: Optional[List[Dict[str, Any]]] = None,
        tool_name: Optional[str] = None,
        stage: Optional[str] = None,
    ) -> None:
        super().__init__(message, tool_name=tool_name, stage=stage)
        self.violations = violations or []


class DatasetLoadError(Exception):
    """Raised when a dataset file cannot be read or is malformed."""


class ConfigError(Exception):
    """Raised when the server configuration is invalid."""

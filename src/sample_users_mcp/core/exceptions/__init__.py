"""Export the exception hierarchy used across registration, dispatch and startup paths."""

from .exceptions import (
    ToolError,
    ToolRegistrationError,
    DuplicateToolError,
    InvalidToolDefinitionError,
    ToolNotFoundError,
    ToolValidationError,
    ToolExecutionError,
    ContractViolationError,
    DatasetLoadError,
    ConfigError,
)

__all__ = [
    "ToolError",
    "ToolRegistrationError",
    "DuplicateToolError",
    "InvalidToolDefinitionError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ToolExecutionError",
    "ContractViolationError",
    "DatasetLoadError",
    "ConfigError",
]

"""Public exports for the tool registry, dispatcher and supporting utilities."""

from .tools import (
    ToolDefinition,
    ToolDescriptor,
    ToolCallRequest,
    InvocationResult,
    ToolRegistry,
    ToolListing,
    ToolDispatcher,
    ToolResponse,
    InvocationStage,
    UnknownFieldPolicy,
    SchemaValidator,
    ContractFactory,
)
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
from .logger import get_logger, setup_logging

__all__ = [
    "ToolDefinition",
    "ToolDescriptor",
    "ToolCallRequest",
    "InvocationResult",
    "ToolRegistry",
    "ToolListing",
    "ToolDispatcher",
    "ToolResponse",
    "InvocationStage",
    "UnknownFieldPolicy",
    "SchemaValidator",
    "ContractFactory",
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
    "get_logger",
    "setup_logging",
]

"""Sample users MCP - a schema-typed tool registry and dispatcher serving users and orders."""

from .core import (
    ToolDefinition,
    ToolDescriptor,
    ToolRegistry,
    ToolDispatcher,
    ToolResponse,
    InvocationResult,
    UnknownFieldPolicy,
    ContractFactory,
    ToolError,
    DuplicateToolError,
    InvalidToolDefinitionError,
    ToolNotFoundError,
    ToolValidationError,
    ToolExecutionError,
    ContractViolationError,
)
from .data import Dataset
from .catalog import build_sample_registry, register_sample_tools
from .config import ServerConfig

__version__ = "1.1.0"

__all__ = [
    "ToolDefinition",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolDispatcher",
    "ToolResponse",
    "InvocationResult",
    "UnknownFieldPolicy",
    "ContractFactory",
    "ToolError",
    "DuplicateToolError",
    "InvalidToolDefinitionError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ToolExecutionError",
    "ContractViolationError",
    "Dataset",
    "build_sample_registry",
    "register_sample_tools",
    "ServerConfig",
]

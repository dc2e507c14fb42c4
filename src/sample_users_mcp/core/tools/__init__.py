from .models import ToolDefinition, ToolDescriptor, ToolCallRequest, InvocationResult
from .registry import ToolRegistry, ToolListing
from .execution import ToolDispatcher, ToolResponse, InvocationStage, UnknownFieldPolicy
from .schema import SchemaValidator, ContractFactory

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
]

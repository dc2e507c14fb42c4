"""Tool-related data models."""

from .models import ToolDefinition, ToolDescriptor
from .tool_call import ToolCallRequest, InvocationResult, canonical_json

__all__ = ["ToolDefinition", "ToolDescriptor", "ToolCallRequest", "InvocationResult", "canonical_json"]

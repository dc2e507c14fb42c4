"""MCP transport adapter for the tool dispatcher."""

from .server import (
    build_http_app,
    build_mcp_server,
    create_dispatcher,
    run_server,
    to_call_tool_result,
    to_mcp_tool,
)

__all__ = [
    "build_http_app",
    "build_mcp_server",
    "create_dispatcher",
    "run_server",
    "to_call_tool_result",
    "to_mcp_tool",
]

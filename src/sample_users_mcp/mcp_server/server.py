"""Expose a ToolDispatcher as an MCP server over streamable HTTP or stdio."""

import asyncio
import contextlib
from typing import Any, AsyncIterator, Dict, List, Optional

import mcp.types as types
import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Route
from starlette.types import ASGIApp, Receive, Scope, Send

from ..catalog import build_sample_registry
from ..config import SERVER_NAME, SERVER_VERSION, ServerConfig
from ..core.logger import get_logger
from ..core.tools import ToolDescriptor, ToolDispatcher, ToolResponse
from ..data import Dataset

logger = get_logger(__name__)

MCP_PATH = "/mcp"
SESSION_ID_HEADER = "Mcp-Session-Id"


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        title=descriptor.title,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
        outputSchema=descriptor.output_schema,
    )


def to_call_tool_result(response: ToolResponse) -> types.CallToolResult:
    """Map a response envelope onto the MCP result type.

    Error envelopes keep their machine-readable part in ``structuredContent``
    under ``error``; MCP clients skip output-schema checks when ``isError`` is set.
    """
    content: List[types.TextContent] = [types.TextContent(type="text", text=block.text) for block in response.content]
    structured: Optional[Dict[str, Any]] = response.structured_content
    if response.is_error and response.error is not None:
        structured = {"error": response.error.model_dump(exclude_none=True)}
    return types.CallToolResult(content=content, structuredContent=structured, isError=response.is_error)


def create_dispatcher(config: ServerConfig) -> ToolDispatcher:
    """Load the dataset, register the tools and wrap them in a dispatcher."""
    dataset = Dataset.from_file(config.data_file) if config.data_file else Dataset.sample()
    registry = build_sample_registry(dataset)
    return ToolDispatcher(registry, tool_timeout=config.tool_timeout, unknown_fields=config.unknown_fields)


def build_mcp_server(dispatcher: ToolDispatcher) -> Server:
    """Create a low-level MCP server whose tools/list and tools/call go through ``dispatcher``.

    Input validation of the SDK is switched off; the dispatcher owns it so that
    every violation is reported with the same error envelope.
    """
    server: Server = Server(
        SERVER_NAME,
        version=SERVER_VERSION,
        instructions="Look up sample users and their orders.",
    )

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [to_mcp_tool(descriptor) for descriptor in dispatcher.list_tools()]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        logger.info("MCP tools/call '%s'", name)
        response = await dispatcher.handle(name, arguments)
        if response.is_error and response.error is not None:
            logger.info("MCP tools/call '%s' failed with %s", name, response.error.code)
        return to_call_tool_result(response)

    return server


class _StreamableHTTPEndpoint:
    """ASGI endpoint handing each request to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def build_http_app(server: Server, config: ServerConfig) -> ASGIApp:
    """Wrap the MCP server in a Starlette app serving stateless streamable HTTP at ``/mcp``.

    Stateless mode gives every request its own transport, so request ids of
    unrelated clients never collide.
    """
    session_manager = StreamableHTTPSessionManager(
        app=server,
        event_store=None,
        json_response=True,
        stateless=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("MCP Server (Streamable HTTP) listening at http://%s:%s%s", config.host, config.port, MCP_PATH)
            yield
        logger.info("MCP Server shut down.")

    app = Starlette(
        routes=[Route(MCP_PATH, endpoint=_StreamableHTTPEndpoint(session_manager), methods=["GET", "POST", "DELETE"])],
        lifespan=lifespan,
    )
    return CORSMiddleware(
        app,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=[SESSION_ID_HEADER],
    )


async def _run_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Server running on stdio.")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_server(config: ServerConfig) -> None:
    """Build everything from ``config`` and serve until interrupted."""
    dispatcher = create_dispatcher(config)
    server = build_mcp_server(dispatcher)
    logger.info("Starting MCP server transport=%s tools=%s", config.transport, dispatcher.list_tools().names())

    if config.transport == "stdio":
        asyncio.run(_run_stdio(server))
        return

    uvicorn.run(
        build_http_app(server, config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )

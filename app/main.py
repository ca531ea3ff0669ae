"""
MCP server over stdio: lists web_search / image_search and routes calls to the dispatcher.
stdout carries the protocol stream, so logs go to stderr. Missing credentials exit at startup.
"""
import asyncio
import logging
import sys
from typing import Any, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server.lowlevel import Server
from pydantic import ValidationError

from app.config import Settings, get_settings
from tools.base import ToolDescriptor, ToolInvocationResult
from tools.dispatcher import SearchDispatcher
from tools.google_client import GoogleSearchClient
from tools.rate_limiter import RateLimiter

log = logging.getLogger(__name__)


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def to_call_tool_result(result: ToolInvocationResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def build_dispatcher(settings: Settings) -> SearchDispatcher:
    client = GoogleSearchClient(
        api_key=settings.google_api_key,
        cse_id=settings.google_cse_id,
        base_url=settings.google_search_url,
        timeout=settings.http_timeout,
    )
    limiter = RateLimiter(per_second=settings.rate_limit_per_second, per_day=settings.rate_limit_per_day)
    return SearchDispatcher(client, limiter)


def build_server(dispatcher: SearchDispatcher, settings: Settings) -> Server:
    """Low-level server so the dispatcher controls both validation and the isError flag."""
    server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(t) for t in dispatcher.list_tools()]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
        result = await dispatcher.dispatch(name, arguments)
        return to_call_tool_result(result)

    return server


def load_settings() -> Settings:
    """Settings or exit(1): both Google credentials are required before serving."""
    try:
        return get_settings()
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]).upper() for err in e.errors() if err.get("loc")})
        log.error("Error: required configuration missing or invalid: %s", ", ".join(missing) or str(e))
        sys.exit(1)


async def serve(settings: Settings) -> None:
    dispatcher = build_dispatcher(settings)
    server = build_server(dispatcher, settings)
    async with dispatcher.client:
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            log.info("Google Search MCP Server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), stream=sys.stderr)
    # httpx logs full request URLs, which include the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main() -> None:
    configure_logging("INFO")
    settings = load_settings()
    logging.getLogger().setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass
    except Exception:
        log.exception("Fatal error running server")
        sys.exit(1)


if __name__ == "__main__":
    main()

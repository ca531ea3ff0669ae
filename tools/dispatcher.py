"""
Routes tool invocations through validate -> rate limit -> search -> format.
dispatch() never raises: every failure becomes an error result ("Error: <message>").
"""
import logging
import time
from typing import Any, Optional

from tools.base import ImageSearchRequest, Rejected, SearchRequest, ToolDescriptor, ToolInvocationResult
from tools.descriptors import TOOL_NAMES, TOOLS
from tools.errors import InvalidArguments, SearchToolError, UnknownTool
from tools.formatting import format_image_results, format_web_results
from tools.google_client import GoogleSearchClient
from tools.rate_limiter import RateLimiter
from tools.validation import decode_request

logger = logging.getLogger(__name__)


class SearchDispatcher:
    """Holds the limiter and upstream client shared by both tools."""

    def __init__(self, client: GoogleSearchClient, limiter: Optional[RateLimiter] = None) -> None:
        self.client = client
        self.limiter = limiter or RateLimiter()

    def list_tools(self) -> list[ToolDescriptor]:
        return list(TOOLS)

    async def run(self, tool_name: str, raw_args: Optional[Any]) -> str:
        """Run one invocation and return the result text. Raises SearchToolError subclasses."""
        if tool_name not in TOOL_NAMES:
            raise UnknownTool(f"Unknown tool: {tool_name}. Available tools: {', '.join(TOOL_NAMES)}")

        decoded = decode_request(tool_name, raw_args)
        if isinstance(decoded, Rejected):
            raise InvalidArguments(decoded.reason)

        self.limiter.admit()
        return await self._search(decoded)

    async def _search(self, request: SearchRequest) -> str:
        items = await self.client.search(request)
        if isinstance(request, ImageSearchRequest):
            return format_image_results(items)
        return format_web_results(items)

    async def dispatch(self, tool_name: str, raw_args: Optional[Any]) -> ToolInvocationResult:
        start = time.perf_counter()
        try:
            text = await self.run(tool_name, raw_args)
        except SearchToolError as e:
            logger.warning(
                "tool_error",
                extra={"tool": tool_name, "error_type": type(e).__name__, "error": str(e)[:200]},
            )
            return ToolInvocationResult(text=f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception("tool_unexpected_error", extra={"tool": tool_name})
            return ToolInvocationResult(text=f"Error: {e}", is_error=True)
        duration = time.perf_counter() - start
        logger.info("tool_done", extra={"tool": tool_name, "duration_sec": round(duration, 3)})
        return ToolInvocationResult(text=text)

"""
Argument decoding for the search tools. Raw host payloads are checked with pydantic
models and decoded into WebSearchRequest / ImageSearchRequest, or Rejected with a reason.
Nothing here touches the rate limiter or the network.
"""
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tools.base import DecodedRequest, ImageSearchRequest, Rejected, SearchRequest, WebSearchRequest
from tools.errors import InvalidArguments

logger = logging.getLogger(__name__)

WEB_SEARCH = "web_search"
IMAGE_SEARCH = "image_search"

MAX_COUNT = 10
DEFAULT_COUNT = 5
DEFAULT_START = 1


class SearchInput(BaseModel):
    """Input shared by both tools. count/start must be real numbers, not numeric strings."""
    model_config = ConfigDict(extra="ignore")

    query: str = Field(description="Search query")
    count: int = Field(default=DEFAULT_COUNT, ge=1, le=MAX_COUNT, description="Number of results (1-10, default 5)")
    start: int = Field(default=DEFAULT_START, ge=1, description="Pagination start index (default 1)")

    @field_validator("query", mode="before")
    @classmethod
    def _query_not_blank(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("query must be a non-empty string")
        return v.strip()

    @field_validator("count", "start", mode="before")
    @classmethod
    def _numeric_only(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        return v


class WebSearchInput(SearchInput):
    """Input for web search. site optionally restricts results to one domain."""
    site: str = Field(default="", description="Optional: Limit search to specific site (e.g., 'example.com')")

    @field_validator("site", mode="before")
    @classmethod
    def _site_is_text(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("site must be a string")
        return v.strip()


class ImageSearchInput(SearchInput):
    """Input for image search."""
    query: str = Field(description="Image search query")


INPUT_MODELS: dict[str, type[SearchInput]] = {
    WEB_SEARCH: WebSearchInput,
    IMAGE_SEARCH: ImageSearchInput,
}


def _describe_errors(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        field = ".".join(str(p) for p in e.get("loc", ())) or "arguments"
        msg = e.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{field}: {msg}")
    return "; ".join(parts)


def decode_request(tool_name: str, raw_args: Optional[Any]) -> DecodedRequest:
    """
    Decode an untyped argument bag for tool_name. Explicit nulls count as absent.
    Returns a request dataclass or Rejected; never raises for bad input.
    """
    model = INPUT_MODELS.get(tool_name)
    if model is None:
        return Rejected(tool_name=tool_name, reason=f"Unknown tool: {tool_name}")
    if raw_args is None:
        return Rejected(tool_name=tool_name, reason="No arguments provided")
    if not isinstance(raw_args, dict):
        return Rejected(tool_name=tool_name, reason=f"Invalid arguments for {tool_name}: expected an object")

    cleaned = {k: v for k, v in raw_args.items() if v is not None}
    try:
        parsed = model.model_validate(cleaned)
    except ValidationError as e:
        reason = f"Invalid arguments for {tool_name}: {_describe_errors(e)}"
        logger.info("arguments_rejected: %s", reason[:200])
        return Rejected(tool_name=tool_name, reason=reason)

    if isinstance(parsed, WebSearchInput):
        return WebSearchRequest(query=parsed.query, count=parsed.count, start=parsed.start, site=parsed.site)
    return ImageSearchRequest(query=parsed.query, count=parsed.count, start=parsed.start)


def validate_request(tool_name: str, raw_args: Optional[Any]) -> SearchRequest:
    """Same as decode_request but raises InvalidArguments on rejection."""
    decoded = decode_request(tool_name, raw_args)
    if isinstance(decoded, Rejected):
        raise InvalidArguments(decoded.reason)
    return decoded

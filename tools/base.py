"""Shared types for tool inputs/outputs. Decoded requests and results are plain dataclasses."""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class WebSearchRequest:
    """Validated arguments for web_search."""
    query: str
    count: int = 5
    start: int = 1
    site: str = ""


@dataclass(frozen=True)
class ImageSearchRequest:
    """Validated arguments for image_search."""
    query: str
    count: int = 5
    start: int = 1


@dataclass(frozen=True)
class Rejected:
    """Argument bag that failed validation; reason is user-facing."""
    tool_name: str
    reason: str


SearchRequest = Union[WebSearchRequest, ImageSearchRequest]
DecodedRequest = Union[WebSearchRequest, ImageSearchRequest, Rejected]


@dataclass
class SearchResultItem:
    """Single upstream result. Any field may be missing; the formatter fills placeholders."""
    title: Optional[str] = None
    snippet: Optional[str] = None
    link: Optional[str] = None
    thumbnail_link: Optional[str] = None


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and JSON schema of a tool, exposed verbatim to the host."""
    name: str
    description: str
    input_schema: dict[str, Any]


@dataclass(frozen=True)
class ToolInvocationResult:
    """Outcome of one dispatch. Same shape on success and failure."""
    text: str
    is_error: bool = False

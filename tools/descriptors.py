"""Tool descriptors served to the host on tools/list. Names and schemas are part of the wire contract."""
from tools.base import ToolDescriptor
from tools.validation import DEFAULT_COUNT, DEFAULT_START, IMAGE_SEARCH, MAX_COUNT, WEB_SEARCH


def _paging_properties() -> dict:
    return {
        "count": {
            "type": "integer",
            "description": f"Number of results (1-{MAX_COUNT}, default {DEFAULT_COUNT})",
            "default": DEFAULT_COUNT,
            "minimum": 1,
            "maximum": MAX_COUNT,
        },
        "start": {
            "type": "integer",
            "description": f"Pagination start index (default {DEFAULT_START})",
            "default": DEFAULT_START,
            "minimum": 1,
        },
    }


WEB_SEARCH_TOOL = ToolDescriptor(
    name=WEB_SEARCH,
    description=(
        "Performs a web search using the Google Custom Search API, ideal for general queries, "
        "news, articles, and online content. Use this for broad information gathering, recent "
        "events, or when you need diverse web sources. Supports pagination and filtering by site. "
        f"Maximum {MAX_COUNT} results per request, with start index for pagination."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search query"},
            **_paging_properties(),
            "site": {
                "type": "string",
                "description": "Optional: Limit search to specific site (e.g., 'example.com')",
                "default": "",
            },
        },
        "required": ["query"],
    },
)

IMAGE_SEARCH_TOOL = ToolDescriptor(
    name=IMAGE_SEARCH,
    description=(
        "Searches for images using Google's Custom Search API. Best for finding images related "
        "to specific terms, concepts, or objects. Returns image URLs, titles, and thumbnails. "
        "Use this when needing to find relevant images or visual references."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Image search query"},
            **_paging_properties(),
        },
        "required": ["query"],
    },
)

TOOLS = (WEB_SEARCH_TOOL, IMAGE_SEARCH_TOOL)
TOOL_NAMES = tuple(t.name for t in TOOLS)

"""
Render search results as numbered text blocks. Every block has the same line count
regardless of which fields upstream returned; gaps get a placeholder.
"""
from typing import Optional, Sequence

from tools.base import SearchResultItem

NO_WEB_RESULTS = "No results found for your query."
NO_IMAGE_RESULTS = "No image results found for your query."

NO_TITLE = "No title available"
NO_DESCRIPTION = "No description available"
NO_URL = "No URL available"
NO_THUMBNAIL = "No thumbnail available"


def _or(value: Optional[str], placeholder: str) -> str:
    if value is None:
        return placeholder
    text = " ".join(str(value).split())
    return text or placeholder


def format_web_results(items: Sequence[SearchResultItem]) -> str:
    if not items:
        return NO_WEB_RESULTS
    return "\n\n".join(
        f"[{i}] Title: {_or(item.title, NO_TITLE)}\n"
        f"Description: {_or(item.snippet, NO_DESCRIPTION)}\n"
        f"URL: {_or(item.link, NO_URL)}"
        for i, item in enumerate(items, 1)
    )


def format_image_results(items: Sequence[SearchResultItem]) -> str:
    if not items:
        return NO_IMAGE_RESULTS
    return "\n\n".join(
        f"[{i}] Title: {_or(item.title, NO_TITLE)}\n"
        f"Description: {_or(item.snippet, NO_DESCRIPTION)}\n"
        f"Image URL: {_or(item.link, NO_URL)}\n"
        f"Thumbnail: {_or(item.thumbnail_link, NO_THUMBNAIL)}"
        for i, item in enumerate(items, 1)
    )

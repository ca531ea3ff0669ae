"""
LangChain bindings for the search tools, for agents that call them in-process instead of over MCP.
Both tools delegate to a SearchDispatcher, so they share its rate limiter and error formatting.
"""
from langchain_core.tools import tool

from tools.dispatcher import SearchDispatcher
from tools.validation import IMAGE_SEARCH, WEB_SEARCH, ImageSearchInput, WebSearchInput


def get_search_tools(dispatcher: SearchDispatcher) -> list:
    """Build the LangChain web/image search tools bound to the given dispatcher."""

    @tool(WEB_SEARCH, args_schema=WebSearchInput)
    async def web_search(query: str, count: int = 5, start: int = 1, site: str = "") -> str:
        """
        Search the web with Google. Use for general queries, news, articles and recent events.
        Returns numbered results with title, description and URL. Set site to restrict to one domain.
        """
        result = await dispatcher.dispatch(WEB_SEARCH, {"query": query, "count": count, "start": start, "site": site})
        return result.text

    @tool(IMAGE_SEARCH, args_schema=ImageSearchInput)
    async def image_search(query: str, count: int = 5, start: int = 1) -> str:
        """
        Search for images with Google. Returns numbered results with title, description,
        image URL and thumbnail URL.
        """
        result = await dispatcher.dispatch(IMAGE_SEARCH, {"query": query, "count": count, "start": start})
        return result.text

    return [web_search, image_search]

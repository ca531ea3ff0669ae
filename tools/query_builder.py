"""Builds Google Custom Search query parameters from validated requests."""
from tools.base import ImageSearchRequest, SearchRequest, WebSearchRequest

MAX_RESULTS_PER_REQUEST = 10  # API limit
SITE_OPERATOR = "site:"


def build_query_text(request: SearchRequest) -> str:
    """Append a site: restriction for web searches unless the query already carries one."""
    if isinstance(request, WebSearchRequest) and request.site and SITE_OPERATOR not in request.query:
        return f"{request.query} {SITE_OPERATOR}{request.site}"
    return request.query


def build_params(request: SearchRequest, api_key: str, cse_id: str) -> dict[str, str]:
    params = {
        "key": api_key,
        "cx": cse_id,
        "q": build_query_text(request),
        "num": str(min(request.count, MAX_RESULTS_PER_REQUEST)),
        "start": str(request.start),
    }
    if isinstance(request, ImageSearchRequest):
        params["searchType"] = "image"
    return params

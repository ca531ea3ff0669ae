"""
HTTP client for the Google Custom Search JSON API (httpx, async).
Separates transport failures (non-2xx, network) from errors the API embeds in a 2xx payload.
No retries: every failure goes straight back to the caller.
"""
import json
import logging
from typing import Any, Optional

import httpx

from tools.base import ImageSearchRequest, SearchRequest, SearchResultItem
from tools.errors import SearchToolError, TransportError, UpstreamApiError
from tools.query_builder import build_params

logger = logging.getLogger(__name__)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"

INVALID_KEY_MESSAGE = (
    "Invalid Google API key. Check the GOOGLE_API_KEY environment variable "
    "and that the Custom Search API is enabled for the key."
)
QUOTA_MESSAGE = "Google Custom Search daily quota exhausted. Try again tomorrow or raise the quota."

# Best-effort: Google does not document these strings as stable.
_INVALID_KEY_MARKERS = ("api key not valid", "api_key_invalid", "invalid api key")
_QUOTA_MARKERS = ("quota exceeded", "dailylimitexceeded", "quota_exceeded", "queries per day")


def _friendly_message(message: str) -> Optional[str]:
    lower = message.lower()
    if any(m in lower for m in _INVALID_KEY_MARKERS):
        return INVALID_KEY_MESSAGE
    if any(m in lower for m in _QUOTA_MARKERS):
        return QUOTA_MESSAGE
    return None


def _embedded_error(data: Any) -> Optional[dict]:
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"]
    return None


def rewrite_error(err: SearchToolError) -> SearchToolError:
    """
    Map recognized upstream messages (bad key, exhausted quota) to a clearer
    UpstreamApiError whose __cause__ is err. Anything else is returned unchanged.
    """
    if isinstance(err, UpstreamApiError):
        code, message = err.code, err.message
    elif isinstance(err, TransportError) and err.body:
        try:
            error_obj = _embedded_error(json.loads(err.body))
        except ValueError:
            error_obj = None
        if error_obj is None:
            return err
        code, message = err.status_code, str(error_obj.get("message", ""))
    else:
        return err

    friendly = _friendly_message(message)
    if friendly is None:
        return err
    rewritten = UpstreamApiError(code, friendly)
    rewritten.__cause__ = err
    return rewritten


def parse_items(data: dict[str, Any], image: bool = False) -> list[SearchResultItem]:
    """Extract result items from a response envelope. Missing or empty items -> []."""
    items = data.get("items") or []
    out = []
    for item in items:
        if not isinstance(item, dict):
            continue
        thumbnail = None
        image_meta = item.get("image")
        if image and isinstance(image_meta, dict):
            thumbnail = image_meta.get("thumbnailLink")
        out.append(
            SearchResultItem(
                title=item.get("title"),
                snippet=item.get("snippet"),
                link=item.get("link"),
                thumbnail_link=thumbnail,
            )
        )
    return out


class GoogleSearchClient:
    """
    Executes Custom Search requests. Owns its httpx.AsyncClient unless one is passed in
    (tests inject a client backed by httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        cse_id: str,
        base_url: str = GOOGLE_SEARCH_URL,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.cse_id = cse_id
        self.base_url = base_url
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "GoogleSearchClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def execute(self, params: dict[str, str]) -> dict[str, Any]:
        """GET the endpoint with params; return the parsed JSON envelope or raise."""
        try:
            r = await self._http.get(self.base_url, params=params, headers={"Accept": "application/json"})
        except httpx.RequestError as e:
            logger.warning("google_request_error: %s", type(e).__name__)
            raise TransportError(None, f"{type(e).__name__}: {e}") from e

        if not r.is_success:
            logger.warning("google_http_error: %s %s", r.status_code, r.text[:200])
            raise TransportError(r.status_code, r.reason_phrase, r.text)

        try:
            data = r.json()
        except ValueError as e:
            raise TransportError(r.status_code, "invalid JSON in response", r.text[:500]) from e

        error_obj = _embedded_error(data)
        if error_obj is not None:
            logger.warning("google_api_error: %s %s", error_obj.get("code"), str(error_obj.get("message"))[:200])
            raise UpstreamApiError(error_obj.get("code"), str(error_obj.get("message", "Unknown error")))
        if not isinstance(data, dict):
            raise TransportError(r.status_code, "unexpected response shape", r.text[:500])
        return data

    async def search(self, request: SearchRequest) -> list[SearchResultItem]:
        params = build_params(request, self.api_key, self.cse_id)
        try:
            data = await self.execute(params)
        except (TransportError, UpstreamApiError) as e:
            rewritten = rewrite_error(e)
            if rewritten is e:
                raise
            raise rewritten from e
        return parse_items(data, image=isinstance(request, ImageSearchRequest))

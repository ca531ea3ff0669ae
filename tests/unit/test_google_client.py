"""Unit tests for GoogleSearchClient: mock HTTP; success, empty, HTTP error, embedded error, friendly rewrites."""
import asyncio
import json

import httpx
import pytest

from tools.base import ImageSearchRequest, WebSearchRequest
from tools.errors import TransportError, UpstreamApiError
from tools.formatting import NO_THUMBNAIL, format_image_results
from tools.google_client import (
    INVALID_KEY_MESSAGE,
    QUOTA_MESSAGE,
    GoogleSearchClient,
    parse_items,
    rewrite_error,
)


def _client(handler) -> GoogleSearchClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleSearchClient(api_key="k", cse_id="cx", http_client=http)


def _search(client, request):
    return asyncio.run(client.search(request))


def test_web_search_success_sends_expected_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["accept"] = request.headers.get("accept")
        return httpx.Response(200, json={"items": [{"title": "T", "snippet": "S", "link": "https://a.com"}]})

    items = _search(_client(handler), WebSearchRequest(query="foo", count=3, site="a.com"))
    assert seen["params"] == {"key": "k", "cx": "cx", "q": "foo site:a.com", "num": "3", "start": "1"}
    assert seen["accept"] == "application/json"
    assert len(items) == 1
    assert items[0].title == "T"
    assert items[0].thumbnail_link is None


def test_image_search_reads_thumbnail():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["searchType"] == "image"
        return httpx.Response(
            200,
            json={"items": [{"title": "Cat", "link": "https://i/c.jpg", "image": {"thumbnailLink": "https://t/c"}}]},
        )

    items = _search(_client(handler), ImageSearchRequest(query="cat"))
    assert items[0].thumbnail_link == "https://t/c"
    assert items[0].snippet is None


@pytest.mark.parametrize("payload", [{}, {"items": []}, {"kind": "customsearch#search"}])
def test_missing_or_empty_items_is_not_an_error(payload):
    items = _search(_client(lambda r: httpx.Response(200, json=payload)), WebSearchRequest(query="q"))
    assert items == []


def test_non_success_status_raises_transport_error():
    def handler(request):
        return httpx.Response(503, text="backend unavailable")

    with pytest.raises(TransportError) as exc:
        _search(_client(handler), WebSearchRequest(query="q"))
    assert exc.value.status_code == 503
    assert exc.value.body == "backend unavailable"
    assert "503" in str(exc.value)


def test_embedded_error_raises_upstream_api_error():
    def handler(request):
        return httpx.Response(200, json={"error": {"code": 400, "message": "Invalid Value"}})

    with pytest.raises(UpstreamApiError) as exc:
        _search(_client(handler), WebSearchRequest(query="q"))
    assert exc.value.code == 400
    assert exc.value.message == "Invalid Value"
    assert exc.value.__cause__ is None


def test_network_error_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with pytest.raises(TransportError) as exc:
        _search(_client(handler), WebSearchRequest(query="q"))
    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_invalid_key_in_error_body_is_rewritten():
    body = {"error": {"code": 400, "message": "API key not valid. Please pass a valid API key."}}

    with pytest.raises(UpstreamApiError) as exc:
        _search(_client(lambda r: httpx.Response(400, json=body)), WebSearchRequest(query="q"))
    assert exc.value.message == INVALID_KEY_MESSAGE
    assert isinstance(exc.value.__cause__, TransportError)
    assert exc.value.__cause__.status_code == 400


def test_quota_in_embedded_error_is_rewritten():
    body = {"error": {"code": 429, "message": "Quota exceeded for quota metric 'Queries per day'"}}

    with pytest.raises(UpstreamApiError) as exc:
        _search(_client(lambda r: httpx.Response(200, json=body)), WebSearchRequest(query="q"))
    assert exc.value.message == QUOTA_MESSAGE
    assert isinstance(exc.value.__cause__, UpstreamApiError)
    assert "Quota exceeded" in exc.value.__cause__.message


def test_rewrite_error_leaves_unrecognized_errors_alone():
    err = UpstreamApiError(500, "Backend Error")
    assert rewrite_error(err) is err
    transport = TransportError(502, "Bad Gateway", "<html>oops</html>")
    assert rewrite_error(transport) is transport
    transport_json = TransportError(500, "Internal", json.dumps({"error": {"message": "boom"}}))
    assert rewrite_error(transport_json) is transport_json


def test_parse_items_skips_non_dict_entries():
    items = parse_items({"items": [{"title": "a"}, "junk", None]})
    assert [i.title for i in items] == ["a"]


def test_owned_client_is_closed():
    client = GoogleSearchClient(api_key="k", cse_id="cx")

    async def run():
        async with client:
            pass

    asyncio.run(run())
    assert client._http.is_closed


def test_malformed_image_metadata_falls_back_to_no_thumbnail():
    payload = {"items": [{"title": "Cat", "link": "https://i/c.jpg", "image": "oops"}]}
    items = _search(_client(lambda r: httpx.Response(200, json=payload)), ImageSearchRequest(query="cat"))
    assert len(items) == 1
    assert items[0].thumbnail_link is None
    assert format_image_results(items).endswith(f"Thumbnail: {NO_THUMBNAIL}")

import asyncio

import httpx
import pytest

from shared.network import HTTPClientError, ToolkitHTTP


def _client(handler, **kwargs):
    return ToolkitHTTP(transport=httpx.MockTransport(handler), **kwargs)


async def _fetch_json(http, url):
    async with http:
        return await http.fetch_json(url)


def test_fetch_json_returns_payload():
    http = _client(lambda request: httpx.Response(200, json={"ok": True}))
    assert asyncio.run(_fetch_json(http, "https://api.test/x")) == {"ok": True}


def test_error_status_carries_code():
    http = _client(lambda request: httpx.Response(404))
    with pytest.raises(HTTPClientError) as info:
        asyncio.run(_fetch_json(http, "https://api.test/x"))
    assert info.value.status_code == 404


def test_invalid_json_raises():
    http = _client(lambda request: httpx.Response(200, text="nope"))
    with pytest.raises(HTTPClientError, match="JSON decode error"):
        asyncio.run(_fetch_json(http, "https://api.test/x"))


def test_retryable_status_is_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json=[1, 2])

    http = _client(handler, max_retries=2, backoff_base=0.0)
    assert asyncio.run(_fetch_json(http, "https://api.test/x")) == [1, 2]
    assert len(calls) == 3


def test_transport_error_becomes_client_error():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    http = _client(handler)
    with pytest.raises(HTTPClientError) as info:
        asyncio.run(_fetch_json(http, "https://api.test/x"))
    assert info.value.status_code is None


def test_unchecked_fetch_returns_error_response():
    async def head():
        async with _client(lambda request: httpx.Response(418)) as http:
            return await http.fetch("https://api.test/", method="head", check_status=False)

    response = asyncio.run(head())
    assert response.status_code == 418
    assert response.request.method == "HEAD"


def test_user_agent_header_is_sent():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, json={})

    asyncio.run(_fetch_json(_client(handler, user_agent="Probe/2"), "https://api.test/"))
    assert seen["ua"] == "Probe/2"


def test_invalid_url_becomes_client_error():
    def handler(request):
        raise AssertionError("request must not be sent")

    http = _client(handler, max_retries=2, backoff_base=0.0)
    with pytest.raises(HTTPClientError, match="invalid URL"):
        asyncio.run(_fetch_json(http, "https://exa\tmple.com/"))

"""Tests for the HTTP card API adapter."""

import asyncio

import httpx
import pytest

from card_manager.adapters.card_api_client import CardApiError, HttpxCardApiClient


def _client(handler) -> HttpxCardApiClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxCardApiClient(
        base_url="https://cards.test/",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_upload_posts_multipart_field() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.read()
        return httpx.Response(200, json={"imageUrl": "https://x/y.png"})

    client = _client(handler)

    payload = asyncio.run(
        client.upload_visiting_card("card.png", b"png-bytes", "image/png")
    )

    assert payload == {"imageUrl": "https://x/y.png"}
    assert seen["method"] == "POST"
    assert seen["path"] == "/api/upload-visiting-card"
    assert str(seen["content_type"]).startswith("multipart/form-data")
    body = seen["body"]
    assert b'name="visitingCard"' in body
    assert b'filename="card.png"' in body
    assert b"png-bytes" in body


def test_list_users_omits_empty_search() -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, json={"data": [], "pagination": {}})

    client = _client(handler)

    asyncio.run(client.list_users(page=1, limit=10))
    asyncio.run(client.list_users(page=2, limit=10, search="acme"))

    assert seen[0].path == "/api/users"
    assert dict(seen[0].params) == {"page": "1", "limit": "10"}
    assert dict(seen[1].params) == {"page": "2", "limit": "10", "search": "acme"}


def test_error_status_raises_card_api_error() -> None:
    client = _client(lambda request: httpx.Response(500, json={"error": "nope"}))

    with pytest.raises(CardApiError) as exc_info:
        asyncio.run(client.list_users(page=1, limit=10))

    assert exc_info.value.status_code == 500


def test_transport_error_raises_card_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)

    with pytest.raises(CardApiError) as exc_info:
        asyncio.run(client.upload_visiting_card("card.png", b"x", "image/png"))

    assert exc_info.value.status_code is None


def test_invalid_json_raises_card_api_error() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(CardApiError):
        asyncio.run(client.list_users(page=1, limit=10))


def test_non_object_body_raises_card_api_error() -> None:
    client = _client(lambda request: httpx.Response(200, json=["a", "b"]))

    with pytest.raises(CardApiError):
        asyncio.run(client.list_users(page=1, limit=10))


def test_close_closes_session() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))

    asyncio.run(client.close())

    assert client.http_client.is_closed

"""Tests for HTTP client adapter."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from aiohttp import test_utils, web

from src.adapters.driven.http.client import HttpClient
from src.core.sender import Sender, build_request
from src.ports.http import HttpPort

__all__ = []


def mock_session(status: int) -> Mock:
    """Create session whose post() yields a response with given status."""
    response = Mock()
    response.status = status
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=response)
    ctx.__aexit__ = AsyncMock(return_value=False)
    session = Mock()
    session.post = Mock(return_value=ctx)
    return session


@pytest.mark.asyncio
async def test_http_client_context_manager() -> None:
    """HTTP client should initialize and close session."""
    client = HttpClient()
    assert client.session is None

    async with client as c:
        assert c.session is not None
        assert c is client

    assert client.session.closed


@pytest.mark.asyncio
async def test_post_sends_body_and_headers() -> None:
    """post() should send encoded body with the request headers."""
    client = HttpClient()
    client.session = mock_session(201)
    req = build_request("http://test", "event", {"x": 1})

    status = await client.post(req)

    assert status == 201
    client.session.post.assert_called_once_with(
        "http://test/event",
        data=b'{"x":1}',
        headers={"Content-Type": "application/json", "Content-Length": "7"},
    )


@pytest.mark.asyncio
async def test_post_returns_error_status() -> None:
    """post() should hand back error statuses without raising."""
    client = HttpClient()
    client.session = mock_session(500)

    status = await client.post(HttpPort(url="http://test/", body="{}"))

    assert status == 500


@pytest.mark.asyncio
async def test_post_raises_if_session_not_initialized() -> None:
    """post() should raise if session is None."""
    client = HttpClient()

    with pytest.raises(RuntimeError, match="Session not initialized"):
        await client.post(HttpPort(url="http://test/", body="{}"))


@pytest.mark.asyncio
async def test_sender_posts_to_live_server() -> None:
    """Sender and client together should deliver the request unchanged."""
    received: list[tuple[str, str, str, str]] = []

    async def handler(request: web.Request) -> web.Response:
        body = await request.text()
        received.append(
            (
                request.path,
                request.headers["Content-Type"],
                request.headers["Content-Length"],
                body,
            )
        )
        return web.Response(status=200)

    app = web.Application()
    app.router.add_post("/login", handler)

    async with test_utils.TestServer(app) as server:
        base_url = f"http://{server.host}:{server.port}"
        async with HttpClient() as http:
            async with Sender(request_fn=http.post, base_url=base_url) as sender:
                sender.send("login", {"user": "a", "pass": "b"})

    assert received == [("/login", "application/json", "23", '{"user":"a","pass":"b"}')]

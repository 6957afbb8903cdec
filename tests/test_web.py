from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest
from aiohttp import web
from aiohttp.test_utils import make_mocked_request

from cookiesession.exceptions import CookieSessionConfigError
from cookiesession.store import CookieStore
from cookiesession.web import SESSION_KEY, clear_session, get_session, save_session, session_middleware, setup


def _make_store() -> CookieStore:
    return CookieStore(
        "session",
        "s3cr3t",
        3600,
        http_only=True,
        clock=lambda: datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC),
    )


def _request(cookie: str | None = None) -> web.Request:
    headers = {"Cookie": f"session={cookie}"} if cookie is not None else {}
    return make_mocked_request("GET", "/", headers=headers)


@pytest.mark.asyncio
async def test_middleware_round_trip_through_aiohttp_objects() -> None:
    store = _make_store()
    middleware = session_middleware(store)
    user = uuid.uuid4()

    async def login(request: web.Request) -> web.StreamResponse:
        session = await get_session(request)
        assert session.valid is False
        session.uid = user
        response = web.Response(text="ok")
        await save_session(request, response)
        return response

    response = await middleware(_request(), login)
    morsel = response.cookies["session"]
    assert morsel["path"] == "/"
    assert morsel["max-age"] == "3600"
    assert morsel["httponly"] is True

    async def whoami(request: web.Request) -> web.StreamResponse:
        session = await get_session(request)
        return web.Response(text=f"{session.valid}:{session.uid}")

    echoed = await middleware(_request(morsel.value), whoami)
    assert isinstance(echoed, web.Response)
    assert echoed.text == f"True:{user}"


@pytest.mark.asyncio
async def test_middleware_degrades_tampered_cookie() -> None:
    middleware = session_middleware(_make_store())

    async def handler(request: web.Request) -> web.StreamResponse:
        session = await get_session(request)
        return web.Response(text=str(session.valid))

    response = await middleware(_request("AAAA"), handler)
    assert isinstance(response, web.Response)
    assert response.text == "False"


@pytest.mark.asyncio
async def test_clear_session_expires_cookie_and_resets_request_session() -> None:
    middleware = session_middleware(_make_store())

    async def logout(request: web.Request) -> web.StreamResponse:
        before = await get_session(request)
        response = web.Response()
        await clear_session(request, response)
        after = await get_session(request)
        assert after.valid is False
        assert after.sid != before.sid
        return response

    response = await middleware(_request(), logout)
    morsel = response.cookies["session"]
    assert morsel.value == ""
    assert morsel["max-age"] == "-1"
    assert morsel["expires"] == "Thu, 01 Jan 1970 00:00:00 GMT"


@pytest.mark.asyncio
async def test_helpers_require_middleware() -> None:
    request = _request()

    with pytest.raises(CookieSessionConfigError, match="middleware is not installed"):
        await get_session(request)
    assert SESSION_KEY not in request


def test_setup_registers_middleware() -> None:
    app = web.Application()
    setup(app, _make_store())

    assert len(app.middlewares) == 1

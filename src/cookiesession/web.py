"""aiohttp.web integration.

Usage::

    store = CookieStore.from_config(StoreConfig.from_env())
    app = web.Application()
    cookiesession.web.setup(app, store)

    async def handler(request: web.Request) -> web.Response:
        session = await get_session(request)
        session.state = b"seen"
        response = web.Response(text="ok")
        await save_session(request, response)
        return response
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from aiohttp import web

from cookiesession.exceptions import CookieSessionConfigError
from cookiesession.session import Session
from cookiesession.store import CookieStore

_logger = logging.getLogger(__name__)

STORE_KEY = "cookiesession.store"
SESSION_KEY = "cookiesession.session"

_Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def session_middleware(store: CookieStore) -> Callable[[web.Request, _Handler], Awaitable[web.StreamResponse]]:
    """Middleware that resolves the request's session before the handler runs."""

    @web.middleware
    async def middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
        request[STORE_KEY] = store
        request[SESSION_KEY] = store.get(request)
        return await handler(request)

    return middleware


def setup(app: web.Application, store: CookieStore) -> None:
    """Install *store* and its middleware on *app*."""
    app.middlewares.append(session_middleware(store))
    _logger.debug("Installed %r", store)


def _store(request: web.Request) -> CookieStore:
    store = request.get(STORE_KEY)
    if store is None:
        raise CookieSessionConfigError("session middleware is not installed; call cookiesession.web.setup(app, store)")
    return store


async def get_session(request: web.Request) -> Session:
    """Return the session resolved for *request*."""
    session = request.get(SESSION_KEY)
    if session is None:
        session = _store(request).get(request)
        request[SESSION_KEY] = session
    return session


async def save_session(request: web.Request, response: web.StreamResponse) -> str:
    """Seal the request's session into *response*; returns the cookie value."""
    return _store(request).save(response, await get_session(request))


async def clear_session(request: web.Request, response: web.StreamResponse) -> None:
    """Delete the session cookie and reset the request's session to anonymous."""
    store = _store(request)
    store.clear(response)
    request[SESSION_KEY] = store.new_session()

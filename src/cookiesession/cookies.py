"""Cookie collaborators: what the store reads from and writes to.

aiohttp's ``web.Request`` and ``web.StreamResponse`` satisfy
:class:`CookieReader` and :class:`CookieWriter` as they are.  For other
servers, :class:`RequestCookies` and :class:`ResponseCookies` translate to
and from raw ``Cookie`` / ``Set-Cookie`` header values.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime
from email.utils import format_datetime
from http.cookies import CookieError, Morsel, SimpleCookie
from typing import Any, Protocol


class CookieReader(Protocol):
    """Anything exposing the request's cookies by name."""

    @property
    def cookies(self) -> Mapping[str, str]: ...


class CookieWriter(Protocol):
    """Anything that can queue a ``Set-Cookie`` on a response."""

    def set_cookie(
        self,
        name: str,
        value: str,
        *,
        expires: str | None = None,
        path: str = "/",
        max_age: int | str | None = None,
        secure: bool | None = None,
        httponly: bool | None = None,
    ) -> Any: ...


def http_date(moment: datetime) -> str:
    """Format *moment* as an IMF-fixdate, e.g. ``Thu, 01 Jan 1970 00:00:00 GMT``."""
    return format_datetime(moment, usegmt=True)


class RequestCookies:
    """Read-only cookie mapping parsed from a ``Cookie`` header."""

    def __init__(self, cookies: Mapping[str, str] | None = None) -> None:
        self._cookies: dict[str, str] = dict(cookies or {})

    @classmethod
    def from_header(cls, header: str | None) -> RequestCookies:
        """Parse a raw ``Cookie`` header; malformed headers yield no cookies."""
        parsed: SimpleCookie = SimpleCookie()
        if header:
            try:
                parsed.load(header)
            except CookieError:
                return cls()
        return cls({key: morsel.value for key, morsel in parsed.items()})

    @property
    def cookies(self) -> Mapping[str, str]:
        return self._cookies


class ResponseCookies:
    """Collects cookies and renders them as ``Set-Cookie`` header values."""

    def __init__(self) -> None:
        self._jar: SimpleCookie = SimpleCookie()

    def set_cookie(
        self,
        name: str,
        value: str,
        *,
        expires: str | None = None,
        path: str = "/",
        max_age: int | str | None = None,
        secure: bool | None = None,
        httponly: bool | None = None,
    ) -> None:
        # A reused morsel would keep flags from an earlier call.
        self._jar.pop(name, None)
        self._jar[name] = value
        morsel = self._jar[name]
        morsel["path"] = path
        if expires is not None:
            morsel["expires"] = expires
        if max_age is not None:
            morsel["max-age"] = str(max_age)
        if secure:
            morsel["secure"] = True
        if httponly:
            morsel["httponly"] = True

    def __getitem__(self, name: str) -> Morsel[str]:
        return self._jar[name]

    def __contains__(self, name: object) -> bool:
        return name in self._jar

    def __iter__(self) -> Iterator[str]:
        return iter(self._jar)

    def headers(self) -> list[tuple[str, str]]:
        """``("Set-Cookie", value)`` pairs, ready for a WSGI/ASGI response."""
        return [("Set-Cookie", morsel.OutputString()) for morsel in self._jar.values()]

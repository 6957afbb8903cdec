"""Custom exception hierarchy for cookiesession."""

from __future__ import annotations


class CookieSessionError(Exception):
    """Base exception for all cookiesession errors."""


class CookieSessionConfigError(CookieSessionError):
    """Invalid or missing store configuration."""


class CookieSessionCryptoError(CookieSessionError):
    """Sealing or opening a cookie envelope failed."""


class CookieSessionRandomError(CookieSessionCryptoError):
    """The secure random source could not produce a nonce.

    Raised by :meth:`cookiesession.store.CookieStore.save`.  The caller must
    not set a cookie when this happens.
    """


class SessionDecodeError(CookieSessionError):
    """Encoded session bytes could not be decoded.

    Only raised by :meth:`cookiesession.session.Session.from_bytes`; the
    store consumes :class:`cookiesession.codec.DecodeResult` values instead.
    """


class SessionTooShortError(SessionDecodeError):
    """Encoded session data is shorter than the fixed header."""


class SessionIdentifierError(SessionDecodeError):
    """An identifier field did not parse as a 128-bit value."""

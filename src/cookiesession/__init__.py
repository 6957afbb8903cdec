"""cookiesession - Stateless encrypted cookie sessions."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cookiesession")
except PackageNotFoundError:
    __version__ = "0+local"
from cookiesession.codec import DecodeFailure, DecodeResult, decode_session, encode_session
from cookiesession.config import StoreConfig
from cookiesession.cookies import CookieReader, CookieWriter, RequestCookies, ResponseCookies
from cookiesession.exceptions import (
    CookieSessionConfigError,
    CookieSessionCryptoError,
    CookieSessionError,
    CookieSessionRandomError,
    SessionDecodeError,
    SessionIdentifierError,
    SessionTooShortError,
)
from cookiesession.session import Session
from cookiesession.store import CookieStore, LoadResult, RejectReason

__all__ = [
    "__version__",
    "CookieReader",
    "CookieSessionConfigError",
    "CookieSessionCryptoError",
    "CookieSessionError",
    "CookieSessionRandomError",
    "CookieStore",
    "CookieWriter",
    "DecodeFailure",
    "DecodeResult",
    "LoadResult",
    "RejectReason",
    "RequestCookies",
    "ResponseCookies",
    "Session",
    "SessionDecodeError",
    "SessionIdentifierError",
    "SessionTooShortError",
    "StoreConfig",
    "decode_session",
    "encode_session",
]

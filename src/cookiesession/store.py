"""Encrypted, stateless cookie session store.

Cookie value format::

    base64(nonce[24] || secretbox(encode_session(session), key, nonce))

using the standard base64 alphabet with padding.  Every way a cookie can be
unusable (absent, bad base64, forged, malformed, expired) ends in the same
fresh anonymous session, so callers of :meth:`CookieStore.get` cannot tell
the cases apart.
"""

from __future__ import annotations

import base64
import binascii
import enum
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from cookiesession._crypto import MAC_SIZE, NONCE_SIZE, SecretBoxCipher, derive_key, random_nonce
from cookiesession._identifiers import DEFAULT_IDENTIFIERS, IdentifierSource
from cookiesession._redact import describe_session, redact_cookie
from cookiesession.codec import decode_session, encode_session
from cookiesession.config import StoreConfig, ttl_delta
from cookiesession.cookies import CookieReader, CookieWriter, http_date
from cookiesession.exceptions import CookieSessionCryptoError
from cookiesession.session import EPOCH, Session

_logger = logging.getLogger(__name__)

COOKIE_PATH = "/"

_MIN_SEALED = NONCE_SIZE + MAC_SIZE


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RejectReason(enum.Enum):
    """Why :meth:`CookieStore.load` refused a cookie value."""

    MISSING = "missing"
    BAD_ENCODING = "bad_encoding"
    TRUNCATED = "truncated"
    FORGED = "forged"
    MALFORMED = "malformed"
    EXPIRED = "expired"


@dataclass(frozen=True)
class LoadResult:
    """A trusted session, or the reason none could be produced."""

    session: Session | None = None
    reason: RejectReason | None = None

    @property
    def ok(self) -> bool:
        return self.session is not None


class CookieStore:
    """Translate between request/response cookies and :class:`Session` values.

    The store keeps only the derived key, never the raw secret, and is not
    mutated after construction, so one instance can serve concurrent
    requests.

    Parameters
    ----------
    name : str
        Cookie name.
    secret : str
        Shared secret; the envelope key is ``SHA256(secret)``.
    ttl : float
        Seconds a cookie stays trusted after its save time.
    http_only, secure : bool
        Cookie attributes applied by :meth:`save` and :meth:`clear`.
    identifiers : IdentifierSource
        Generates fresh session ids and parses decoded ones.
    clock : callable
        Returns the current aware UTC datetime.
    random_bytes : callable
        Secure random source used for nonces.

    Raises
    ------
    CookieSessionConfigError
        If *ttl* is not finite or is outside ``(0, MAX_TTL]``.
    """

    def __init__(
        self,
        name: str,
        secret: str,
        ttl: float,
        *,
        http_only: bool = False,
        secure: bool = False,
        identifiers: IdentifierSource = DEFAULT_IDENTIFIERS,
        clock: Callable[[], datetime] = _utcnow,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        self._name = name
        self._ttl = float(ttl)
        self._ttl_delta = ttl_delta(self._ttl)
        self._http_only = http_only
        self._secure = secure
        self._cipher = SecretBoxCipher(derive_key(secret))
        self._identifiers = identifiers
        self._clock = clock
        self._random_bytes = random_bytes

    @classmethod
    def from_config(cls, config: StoreConfig, **kwargs: Any) -> CookieStore:
        """Build a store from a validated :class:`StoreConfig`."""
        return cls(
            config.name,
            config.secret,
            config.ttl,
            http_only=config.http_only,
            secure=config.secure,
            **kwargs,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def http_only(self) -> bool:
        return self._http_only

    @property
    def secure(self) -> bool:
        return self._secure

    @property
    def max_age(self) -> int:
        """TTL in whole seconds, as sent in ``Max-Age``."""
        return int(self._ttl)

    def new_session(self) -> Session:
        """A fresh anonymous session with a newly generated id."""
        return Session(sid=self._identifiers.generate())

    def load(self, value: str | None) -> LoadResult:
        """Authenticate and decode a raw cookie value.

        Never raises for bad input; the returned :class:`LoadResult` carries
        either the trusted session or a :class:`RejectReason`.
        """
        if value is None:
            return LoadResult(reason=RejectReason.MISSING)

        try:
            sealed = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return self._reject(RejectReason.BAD_ENCODING, value)
        # Non-zero pad bits decode to the same bytes; only the canonical form is accepted.
        if base64.b64encode(sealed).decode("ascii") != value:
            return self._reject(RejectReason.BAD_ENCODING, value)

        try:
            plaintext = self._cipher.open(sealed)
        except CookieSessionCryptoError:
            reason = RejectReason.TRUNCATED if len(sealed) < _MIN_SEALED else RejectReason.FORGED
            return self._reject(reason, value)

        decoded = decode_session(plaintext, self._identifiers)
        if decoded.session is None:
            _logger.debug("Session payload malformed: %s", decoded.detail)
            return self._reject(RejectReason.MALFORMED, value)

        session = decoded.session
        if self._clock() - session.time > self._ttl_delta:
            return self._reject(RejectReason.EXPIRED, value)

        return LoadResult(session=session)

    def get(self, request: CookieReader) -> Session:
        """Return the request's trusted session or a fresh anonymous one."""
        result = self.load(request.cookies.get(self._name))
        if result.session is not None:
            return result.session
        return self.new_session()

    def dumps(self, session: Session) -> str:
        """Stamp *session* with the current time and seal it into a cookie value.

        Raises
        ------
        CookieSessionRandomError
            If no nonce could be drawn.  *session* is left untouched.
        """
        nonce = random_nonce(self._random_bytes)
        session.time = self._clock()
        return base64.b64encode(self._cipher.seal(encode_session(session), nonce)).decode("ascii")

    def save(self, response: CookieWriter, session: Session) -> str:
        """Write *session* to *response* as a freshly sealed cookie.

        Returns the cookie value.

        Raises
        ------
        CookieSessionRandomError
            If no nonce could be drawn; no cookie is set.
        """
        value = self.dumps(session)
        response.set_cookie(
            self._name,
            value,
            expires=http_date(session.time + self._ttl_delta),
            path=COOKIE_PATH,
            max_age=self.max_age,
            secure=self._secure,
            httponly=self._http_only,
        )
        _logger.debug(
            "Saved session cookie %s: %s",
            self._name,
            describe_session(session),
        )
        return value

    def clear(self, response: CookieWriter) -> None:
        """Tell the client to delete the session cookie."""
        response.set_cookie(
            self._name,
            "",
            expires=http_date(EPOCH),
            path=COOKIE_PATH,
            max_age=-1,
            secure=self._secure,
            httponly=self._http_only,
        )

    def _reject(self, reason: RejectReason, value: str) -> LoadResult:
        _logger.debug("Rejected session cookie %s (%s): %s", self._name, reason.value, redact_cookie(value))
        return LoadResult(reason=reason)

    def __repr__(self) -> str:
        return f"CookieStore(name={self._name!r}, ttl={self._ttl!r}, http_only={self._http_only!r}, secure={self._secure!r})"


"""Store configuration for cookiesession."""

from __future__ import annotations

import dataclasses
import math
import os
import re
from datetime import timedelta
from typing import Any

from cookiesession.exceptions import CookieSessionConfigError

#: Default cookie time-to-live in seconds (24 hours).
DEFAULT_TTL: float = 24 * 3600

#: Largest accepted TTL in seconds, the span of a signed 64-bit nanosecond count (about 292 years).
MAX_TTL: float = (2**63 - 1) / 1e9

# RFC 6265 cookie-name is an RFC 7230 token.
_COOKIE_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def ttl_delta(ttl: float) -> timedelta:
    """Validate *ttl* seconds and return it as a :class:`timedelta`.

    Raises
    ------
    CookieSessionConfigError
        If *ttl* is not a finite number in ``(0, MAX_TTL]``.
    """
    if not (math.isfinite(ttl) and 0 < ttl <= MAX_TTL):
        raise CookieSessionConfigError(f"ttl must be finite and in (0, {MAX_TTL:.0f}] seconds (got {ttl})")
    return timedelta(seconds=ttl)


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Cookie store configuration.

    Parameters
    ----------
    secret : str
        Shared secret hashed into the envelope key.  Never sent to clients.
    name : str
        Cookie name.
    ttl : float
        Seconds a saved cookie stays trusted, measured from its save time.
        Also used for the cookie's ``Expires`` and ``Max-Age``.
    http_only : bool
        Set the ``HttpOnly`` attribute.
    secure : bool
        Set the ``Secure`` attribute.
    """

    secret: str = dataclasses.field(repr=False)
    name: str = "session"
    ttl: float = DEFAULT_TTL
    http_only: bool = False
    secure: bool = False

    def __post_init__(self) -> None:
        if not self.secret:
            raise CookieSessionConfigError("secret must not be empty")
        if not _COOKIE_NAME.fullmatch(self.name):
            raise CookieSessionConfigError(f"invalid cookie name: {self.name!r}")
        ttl_delta(self.ttl)

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads ``COOKIESESSION_SECRET`` and the optional
        ``COOKIESESSION_NAME``, ``COOKIESESSION_TTL``,
        ``COOKIESESSION_HTTP_ONLY`` and ``COOKIESESSION_SECURE``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        CookieSessionConfigError
            If a value is missing or malformed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        for env_key, field_name in (("COOKIESESSION_SECRET", "secret"), ("COOKIESESSION_NAME", "name")):
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        ttl_env = env.get("COOKIESESSION_TTL")
        if ttl_env is not None and "ttl" not in overrides:
            try:
                config_kwargs["ttl"] = float(ttl_env)
            except ValueError as exc:
                raise CookieSessionConfigError(f"COOKIESESSION_TTL must be a number (got {ttl_env!r})") from exc

        if "http_only" not in overrides:
            config_kwargs["http_only"] = _env_bool(env.get("COOKIESESSION_HTTP_ONLY"), False)
        if "secure" not in overrides:
            config_kwargs["secure"] = _env_bool(env.get("COOKIESESSION_SECURE"), False)

        config_kwargs.update(overrides)
        if "secret" not in config_kwargs:
            raise CookieSessionConfigError("COOKIESESSION_SECRET is not set")

        return cls(**config_kwargs)

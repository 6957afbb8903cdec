"""The session record carried inside the cookie."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cookiesession._identifiers import NIL_ID

EPOCH = datetime.fromtimestamp(0, tz=UTC)


class Session(BaseModel):
    """Per-request session state.

    A session is built by :meth:`cookiesession.store.CookieStore.get`,
    mutated by the application while handling the request, and written back
    with :meth:`cookiesession.store.CookieStore.save`.

    Parameters
    ----------
    valid : bool
        ``True`` only when decoded from a verified, unexpired cookie.  An
        invalid session is anonymous whatever its other fields contain.
    time : datetime
        UTC time of the last save.  Naive datetimes are taken as UTC.
    sid : UUID
        Session identifier, stable for the life of the session.
    uid : UUID
        Authenticated user, nil until the application sets it.
    real_uid : UUID
        The real identity when ``uid`` is an acting-as target.
    state : bytes
        Opaque application payload.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    valid: bool = False
    time: datetime = EPOCH
    sid: uuid.UUID = NIL_ID
    uid: uuid.UUID = NIL_ID
    real_uid: uuid.UUID = NIL_ID
    state: bytes = Field(default=b"", repr=False)

    @field_validator("time")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @property
    def is_authenticated(self) -> bool:
        """Whether the cookie vouches for a logged-in user."""
        return self.valid and self.uid != NIL_ID

    @property
    def is_impersonating(self) -> bool:
        """Whether ``uid`` is an acting-as target of a different real user."""
        return self.valid and self.real_uid != NIL_ID and self.real_uid != self.uid

    def expires_at(self, ttl: float) -> datetime:
        """When a cookie saved at :attr:`time` stops being trusted."""
        return self.time + timedelta(seconds=ttl)

    def to_bytes(self) -> bytes:
        """Encode with the fixed binary layout."""
        from cookiesession.codec import encode_session

        return encode_session(self)

    @classmethod
    def from_bytes(cls, data: bytes) -> Session:
        """Decode the fixed binary layout.

        Raises
        ------
        SessionTooShortError
            If *data* is shorter than the fixed header.
        SessionIdentifierError
            If an identifier fails to parse.
        """
        from cookiesession.codec import decode_session

        return decode_session(data).unwrap()

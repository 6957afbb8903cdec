"""Fixed-layout binary codec for :class:`~cookiesession.session.Session`.

Layout::

    offset  size  field
    0       8     time, big-endian signed Unix seconds
    8       16    sid
    24      16    uid
    40      16    real_uid
    56      -     state, to the end of the buffer

``state`` has no length prefix.  The authenticated-encryption boundary
delimits the whole record, so the decoder always consumes the entire buffer.
"""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass
from datetime import UTC, datetime

from cookiesession._identifiers import DEFAULT_IDENTIFIERS, IDENTIFIER_SIZE, IdentifierSource
from cookiesession.exceptions import SessionDecodeError, SessionIdentifierError, SessionTooShortError
from cookiesession.session import Session

TIMESTAMP_SIZE = 8
HEADER_SIZE = TIMESTAMP_SIZE + 3 * IDENTIFIER_SIZE

_TIMESTAMP = struct.Struct(">q")
_IDENTIFIER_OFFSETS = (
    ("sid", TIMESTAMP_SIZE),
    ("uid", TIMESTAMP_SIZE + IDENTIFIER_SIZE),
    ("real_uid", TIMESTAMP_SIZE + 2 * IDENTIFIER_SIZE),
)


class DecodeFailure(enum.Enum):
    """Why a buffer did not decode."""

    TOO_SHORT = "too_short"
    BAD_IDENTIFIER = "bad_identifier"
    BAD_TIMESTAMP = "bad_timestamp"


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of :func:`decode_session`: a session or a failure kind."""

    session: Session | None = None
    failure: DecodeFailure | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.session is not None

    def unwrap(self) -> Session:
        """Return the session or raise the matching :class:`SessionDecodeError`."""
        if self.session is not None:
            return self.session
        if self.failure is DecodeFailure.TOO_SHORT:
            raise SessionTooShortError(self.detail)
        if self.failure is DecodeFailure.BAD_IDENTIFIER:
            raise SessionIdentifierError(self.detail)
        raise SessionDecodeError(self.detail)


def encode_session(session: Session) -> bytes:
    """Serialize *session*; ``time`` is floored to whole seconds."""
    seconds = math.floor(session.time.timestamp())
    return b"".join(
        (
            _TIMESTAMP.pack(seconds),
            session.sid.bytes,
            session.uid.bytes,
            session.real_uid.bytes,
            session.state,
        )
    )


def decode_session(data: bytes, identifiers: IdentifierSource = DEFAULT_IDENTIFIERS) -> DecodeResult:
    """Deserialize *data* without raising.

    A successful result always has ``valid=True``; whether the session is
    trusted is decided by the caller after authentication and TTL checks.
    """
    if len(data) < HEADER_SIZE:
        return DecodeResult(
            failure=DecodeFailure.TOO_SHORT,
            detail=f"encoded session data is too short ({len(data)} < {HEADER_SIZE} bytes)",
        )

    ids = []
    for name, offset in _IDENTIFIER_OFFSETS:
        try:
            ids.append(identifiers.parse(data[offset : offset + IDENTIFIER_SIZE]))
        except ValueError as exc:
            return DecodeResult(failure=DecodeFailure.BAD_IDENTIFIER, detail=f"{name}: {exc}")
    sid, uid, real_uid = ids

    (seconds,) = _TIMESTAMP.unpack_from(data, 0)
    try:
        stamp = datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return DecodeResult(failure=DecodeFailure.BAD_TIMESTAMP, detail=f"timestamp out of range: {seconds}")

    return DecodeResult(
        session=Session(
            valid=True,
            time=stamp,
            sid=sid,
            uid=uid,
            real_uid=real_uid,
            state=bytes(data[HEADER_SIZE:]),
        )
    )

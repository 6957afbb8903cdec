"""128-bit identifier capability used by the codec and the store."""

from __future__ import annotations

import uuid
from typing import Protocol

#: Width of every serialized identifier in bytes.
IDENTIFIER_SIZE = 16

NIL_ID = uuid.UUID(int=0)


class IdentifierSource(Protocol):
    """Generate and parse the 128-bit identifiers carried by a session."""

    def generate(self) -> uuid.UUID: ...

    def parse(self, data: bytes) -> uuid.UUID: ...


class UuidIdentifierSource:
    """Random (version 4) UUIDs."""

    def generate(self) -> uuid.UUID:
        return uuid.uuid4()

    def parse(self, data: bytes) -> uuid.UUID:
        """Parse exactly :data:`IDENTIFIER_SIZE` raw bytes.

        Raises
        ------
        ValueError
            If *data* has the wrong length.
        """
        if len(data) != IDENTIFIER_SIZE:
            raise ValueError(f"identifier must be {IDENTIFIER_SIZE} bytes (got {len(data)})")
        return uuid.UUID(bytes=bytes(data))


DEFAULT_IDENTIFIERS: IdentifierSource = UuidIdentifierSource()

"""Key derivation for the cookie envelope."""

from __future__ import annotations

import hashlib


def derive_key(secret: str) -> bytes:
    """Derive the 32-byte envelope key from a configured secret.

    Computed as ``SHA256(secret)`` over the UTF-8 encoding, so the same
    secret always yields the same key and no key material needs storing.

    Parameters
    ----------
    secret : str
        The shared secret string.

    Returns
    -------
    bytes
        32-byte raw digest.
    """
    return hashlib.sha256(secret.encode("utf-8")).digest()

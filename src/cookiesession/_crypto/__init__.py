"""Cryptographic primitives for cookie envelopes."""

from __future__ import annotations

from cookiesession._crypto.hashing import derive_key
from cookiesession._crypto.secretbox import KEY_SIZE, MAC_SIZE, NONCE_SIZE, SecretBoxCipher, random_nonce

__all__ = [
    "KEY_SIZE",
    "MAC_SIZE",
    "NONCE_SIZE",
    "SecretBoxCipher",
    "derive_key",
    "random_nonce",
]

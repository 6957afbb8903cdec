"""XSalsa20-Poly1305 envelope for cookie payloads.

Cookie values carry ``nonce || box`` where *box* is the NaCl secretbox of
the encoded session under a 32-byte key.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable

from nacl.exceptions import CryptoError
from nacl.secret import SecretBox

from cookiesession.exceptions import CookieSessionCryptoError, CookieSessionRandomError

KEY_SIZE: int = SecretBox.KEY_SIZE
NONCE_SIZE: int = SecretBox.NONCE_SIZE
MAC_SIZE: int = SecretBox.MACBYTES


def random_nonce(random_bytes: Callable[[int], bytes] = secrets.token_bytes) -> bytes:
    """Draw a fresh nonce from the secure random source.

    Raises
    ------
    CookieSessionRandomError
        If the source fails or returns fewer than :data:`NONCE_SIZE` bytes.
    """
    try:
        nonce = random_bytes(NONCE_SIZE)
    except (OSError, NotImplementedError) as exc:
        raise CookieSessionRandomError(f"couldn't get random nonce: {exc}") from exc
    if len(nonce) != NONCE_SIZE:
        raise CookieSessionRandomError(f"couldn't get random nonce: got {len(nonce)} of {NONCE_SIZE} bytes")
    return bytes(nonce)


class SecretBoxCipher:
    """Seal and open cookie payloads under a fixed key."""

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise CookieSessionCryptoError(f"envelope key must be {KEY_SIZE} bytes (got {len(key)})")
        self._box = SecretBox(key)

    def seal(self, plaintext: bytes, nonce: bytes) -> bytes:
        """Encrypt *plaintext* and return ``nonce || ciphertext || tag``.

        Raises
        ------
        CookieSessionCryptoError
            If the nonce has the wrong size.
        """
        if len(nonce) != NONCE_SIZE:
            raise CookieSessionCryptoError(f"nonce must be {NONCE_SIZE} bytes (got {len(nonce)})")
        try:
            return bytes(self._box.encrypt(plaintext, nonce))
        except CryptoError as exc:
            raise CookieSessionCryptoError(f"secretbox seal failed: {exc}") from exc

    def open(self, sealed: bytes) -> bytes:
        """Split the nonce prefix off *sealed* and authenticate-decrypt the rest.

        Raises
        ------
        CookieSessionCryptoError
            If *sealed* is truncated or fails authentication.
        """
        if len(sealed) < NONCE_SIZE + MAC_SIZE:
            raise CookieSessionCryptoError(f"sealed payload too short ({len(sealed)} bytes)")
        nonce, box = sealed[:NONCE_SIZE], sealed[NONCE_SIZE:]
        try:
            return bytes(self._box.decrypt(box, nonce))
        except CryptoError as exc:
            raise CookieSessionCryptoError("secretbox authentication failed") from exc

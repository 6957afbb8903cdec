from __future__ import annotations

import hashlib

import pytest

from cookiesession._crypto import KEY_SIZE, MAC_SIZE, NONCE_SIZE, SecretBoxCipher, derive_key, random_nonce
from cookiesession.exceptions import CookieSessionCryptoError, CookieSessionRandomError


def test_derive_key_is_sha256_of_secret() -> None:
    key = derive_key("s3cr3t")

    assert len(key) == KEY_SIZE == 32
    assert key == hashlib.sha256(b"s3cr3t").digest()
    assert derive_key("s3cr3t") == key
    assert derive_key("other") != key


def test_seal_prepends_nonce_and_opens() -> None:
    cipher = SecretBoxCipher(derive_key("k"))
    nonce = bytes(range(NONCE_SIZE))

    sealed = cipher.seal(b"payload", nonce)

    assert sealed[:NONCE_SIZE] == nonce
    assert len(sealed) == NONCE_SIZE + MAC_SIZE + len(b"payload")
    assert cipher.open(sealed) == b"payload"


def test_open_rejects_wrong_key_and_truncation() -> None:
    sealed = SecretBoxCipher(derive_key("a")).seal(b"payload", b"\x01" * NONCE_SIZE)

    with pytest.raises(CookieSessionCryptoError, match="authentication failed"):
        SecretBoxCipher(derive_key("b")).open(sealed)
    with pytest.raises(CookieSessionCryptoError, match="too short"):
        SecretBoxCipher(derive_key("a")).open(sealed[: NONCE_SIZE + MAC_SIZE - 1])


def test_cipher_rejects_bad_key_and_nonce_sizes() -> None:
    with pytest.raises(CookieSessionCryptoError):
        SecretBoxCipher(b"short")
    with pytest.raises(CookieSessionCryptoError):
        SecretBoxCipher(derive_key("k")).seal(b"x", b"\x00" * 12)


def test_random_nonce_wraps_source_failures() -> None:
    def _broken(_n: int) -> bytes:
        raise OSError("entropy source unavailable")

    assert len(random_nonce()) == NONCE_SIZE
    with pytest.raises(CookieSessionRandomError, match="couldn't get random nonce"):
        random_nonce(_broken)
    with pytest.raises(CookieSessionRandomError):
        random_nonce(lambda n: b"\x00" * (n - 1))

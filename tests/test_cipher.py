"""Testy silnika deszyfrowania mediów."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from conftest import MEDIA_IV, MEDIA_KEY, PNG_BYTES
from media_blob.core.errors import DecryptionFailure
from media_blob.crypto import MEDIA_CIPHER, CipherScheme, decrypt_media, encrypt_media


@pytest.mark.parametrize("plaintext", [b"", b"x", b"0123456789abcdef", PNG_BYTES, bytes(range(256)) * 5])
def test_round_trip(plaintext: bytes) -> None:
    ciphertext = encrypt_media(plaintext, MEDIA_KEY, MEDIA_IV)

    assert len(ciphertext) % MEDIA_CIPHER.block_size == 0
    assert decrypt_media(ciphertext, MEDIA_KEY, MEDIA_IV) == plaintext


def test_decryption_is_deterministic() -> None:
    ciphertext = encrypt_media(PNG_BYTES, MEDIA_KEY, MEDIA_IV)

    assert encrypt_media(PNG_BYTES, MEDIA_KEY, MEDIA_IV) == ciphertext
    assert decrypt_media(ciphertext, MEDIA_KEY, MEDIA_IV) == decrypt_media(ciphertext, MEDIA_KEY, MEDIA_IV)


def test_default_scheme_is_aes_256_cbc() -> None:
    assert MEDIA_CIPHER.name == "aes-256-cbc"
    assert MEDIA_CIPHER.key_size == 32
    assert MEDIA_CIPHER.iv_size == 16


@pytest.mark.parametrize("key", [b"", MEDIA_KEY[:16], MEDIA_KEY + b"\x00"])
def test_bad_key_length_fails(key: bytes) -> None:
    ciphertext = encrypt_media(PNG_BYTES, MEDIA_KEY, MEDIA_IV)

    with pytest.raises(DecryptionFailure):
        decrypt_media(ciphertext, key, MEDIA_IV)


def test_bad_iv_length_fails() -> None:
    ciphertext = encrypt_media(PNG_BYTES, MEDIA_KEY, MEDIA_IV)

    with pytest.raises(DecryptionFailure):
        decrypt_media(ciphertext, MEDIA_KEY, MEDIA_IV[:8])


def test_non_bytes_key_fails() -> None:
    with pytest.raises(DecryptionFailure):
        decrypt_media(b"\x00" * 16, None, MEDIA_IV)  # type: ignore[arg-type]


@pytest.mark.parametrize("ciphertext", [b"", b"\x00" * 15, b"\x00" * 17])
def test_bad_ciphertext_length_fails(ciphertext: bytes) -> None:
    with pytest.raises(DecryptionFailure):
        decrypt_media(ciphertext, MEDIA_KEY, MEDIA_IV)


def test_invalid_padding_fails_without_partial_output() -> None:
    # A block of zeros decrypts to a last byte of 0, which is never valid PKCS7.
    encryptor = Cipher(algorithms.AES(MEDIA_KEY), modes.CBC(MEDIA_IV)).encryptor()
    ciphertext = encryptor.update(b"\x00" * 32) + encryptor.finalize()

    with pytest.raises(DecryptionFailure) as excinfo:
        decrypt_media(ciphertext, MEDIA_KEY, MEDIA_IV)

    assert isinstance(excinfo.value.__cause__, ValueError)


def test_custom_scheme_key_size() -> None:
    scheme = CipherScheme(name="aes-128-cbc", key_size=16, iv_size=16)
    key = MEDIA_KEY[:16]

    ciphertext = encrypt_media(b"payload", key, MEDIA_IV, scheme=scheme)

    assert decrypt_media(ciphertext, key, MEDIA_IV, scheme=scheme) == b"payload"
    with pytest.raises(DecryptionFailure):
        decrypt_media(ciphertext, MEDIA_KEY, MEDIA_IV, scheme=scheme)

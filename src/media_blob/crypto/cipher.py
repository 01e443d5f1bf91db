"""Silnik deszyfrowania mediów (stały schemat blokowy).

The cipher is a protocol constant of the media service rather than a design
choice, so it is kept in one place: ``MEDIA_CIPHER``. Story media is
encrypted with AES-256 in CBC mode with PKCS7 padding, using the per-story
key and IV handed out by the session layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from media_blob.core.errors import DecryptionFailure


@dataclass(frozen=True, slots=True)
class CipherScheme:
    """Parametry schematu szyfrowania mediów."""

    name: str
    key_size: int
    iv_size: int
    block_size: int = 16

    def validate(self, *, key: bytes, iv: bytes) -> None:
        if not isinstance(key, (bytes, bytearray)) or len(key) != self.key_size:
            raise DecryptionFailure(
                f"{self.name}: klucz musi mieć {self.key_size} bajtów (otrzymano {_length_of(key)})"
            )
        if not isinstance(iv, (bytes, bytearray)) or len(iv) != self.iv_size:
            raise DecryptionFailure(
                f"{self.name}: IV musi mieć {self.iv_size} bajtów (otrzymano {_length_of(iv)})"
            )

    def _cipher(self, key: bytes, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)))


MEDIA_CIPHER = CipherScheme(name="aes-256-cbc", key_size=32, iv_size=16)

Decryptor = Callable[[bytes, bytes, bytes], bytes]


def _length_of(value: object) -> str:
    try:
        return str(len(value))  # type: ignore[arg-type]
    except TypeError:
        return type(value).__name__


def decrypt_media(ciphertext: bytes, key: bytes, iv: bytes, *, scheme: CipherScheme = MEDIA_CIPHER) -> bytes:
    """Odszyfrowuje media i usuwa padding PKCS7.

    Raises ``DecryptionFailure`` when the key, IV or ciphertext length is
    wrong, or when the padding does not verify. Partially decrypted data is
    never returned.
    """

    scheme.validate(key=key, iv=iv)
    if not ciphertext or len(ciphertext) % scheme.block_size:
        raise DecryptionFailure(
            f"{scheme.name}: długość szyfrogramu ({len(ciphertext or b'')}) "
            f"nie jest wielokrotnością bloku {scheme.block_size}"
        )

    decryptor = scheme._cipher(key, iv).decryptor()
    padded = decryptor.update(bytes(ciphertext)) + decryptor.finalize()

    unpadder = padding.PKCS7(scheme.block_size * 8).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise DecryptionFailure(f"{scheme.name}: nieprawidłowy padding") from exc


def encrypt_media(plaintext: bytes, key: bytes, iv: bytes, *, scheme: CipherScheme = MEDIA_CIPHER) -> bytes:
    """Szyfruje media tym samym schematem (narzędzia i testy)."""

    scheme.validate(key=key, iv=iv)
    padder = padding.PKCS7(scheme.block_size * 8).padder()
    padded = padder.update(bytes(plaintext)) + padder.finalize()
    encryptor = scheme._cipher(key, iv).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


__all__ = ["CipherScheme", "Decryptor", "MEDIA_CIPHER", "decrypt_media", "encrypt_media"]

"""Wspólne fikstury: przykładowe nagłówki mediów, archiwa i materiał kluczowy."""

from __future__ import annotations

import io
import zipfile
from typing import Iterable, Tuple

import pytest

from media_blob.core.models import StoryContext

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x01" * 32
MP4_BYTES = b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isomiso2" + b"\x00" * 32
TEXT_BYTES = b"just some plain text that is not media"

MEDIA_KEY = bytes(range(32))
MEDIA_IV = bytes(range(100, 116))


def make_zip(members: Iterable[Tuple[str, bytes]], *, compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Buduje archiwum ZIP w pamięci; nazwy kończące się na '/' są katalogami."""

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compression) as archive:
        for name, data in members:
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def mp4_bytes() -> bytes:
    return MP4_BYTES


@pytest.fixture
def story_context() -> StoryContext:
    return StoryContext(media_key=MEDIA_KEY, media_iv=MEDIA_IV)


class RecordingDecryptor:
    """Zastępczy silnik deszyfrowania zliczający wywołania."""

    def __init__(self, plaintext: bytes | None = None) -> None:
        self.calls: list[tuple[bytes, bytes, bytes]] = []
        self._plaintext = plaintext

    def __call__(self, ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
        self.calls.append((ciphertext, key, iv))
        if self._plaintext is None:
            raise AssertionError("decryption must not be invoked")
        return self._plaintext


@pytest.fixture
def recording_decryptor() -> RecordingDecryptor:
    return RecordingDecryptor()

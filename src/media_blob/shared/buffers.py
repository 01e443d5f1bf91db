"""Bezstanowe funkcje pomocnicze dla buforów bajtowych."""

from __future__ import annotations

import base64
import binascii
from pathlib import Path
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview, str]


def to_bytes(data: BytesLike | None) -> bytes | None:
    """Zwraca niezmienną kopię danych jako ``bytes``.

    Strings are encoded as UTF-8. ``None`` is passed through so that callers
    can report missing input themselves.
    """

    if data is None:
        return None
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Nieobsługiwany typ danych: {type(data).__name__}")


def decode_base64(value: str | bytes) -> bytes:
    """Dekoduje base64 w trybie ścisłym."""

    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Nieprawidłowe dane base64") from exc


def read_blob(path: Path) -> bytes:
    """Wczytuje cały plik jako blob."""

    return Path(path).read_bytes()

"""Ładowanie i interpretacja tabeli sygnatur formatów mediów."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from media_blob.core.models import MediaType

_DATA_PACKAGE = "media_blob.data"
_DEFAULT_FILE = "media_signatures.json"

_CATEGORIES = ("archive", "image", "video", "other")

_MIME_TO_TYPE = {
    "application/zip": MediaType.ZIP,
    "image/png": MediaType.PNG,
    "image/jpeg": MediaType.JPEG,
    "video/mp4": MediaType.MP4,
}


@dataclass(frozen=True, slots=True)
class SignatureMatcher:
    """Pojedyncza reguła dopasowania surowych danych."""

    type: str
    pattern: bytes
    offset: int | None = None

    def matches(self, data: bytes) -> bool:
        if self.type == "contains":
            if self.offset is None:
                return self.pattern in data
            end = self.offset + len(self.pattern)
            if end > len(data):
                return False
            return data[self.offset:end] == self.pattern
        if self.type == "equals":
            start = self.offset or 0
            end = start + len(self.pattern)
            if end > len(data):
                return False
            return data[start:end] == self.pattern
        raise ValueError(f"Nieobsługiwany typ matchera: {self.type}")


@dataclass(frozen=True, slots=True)
class MediaSignature:
    """Konfiguracyjna definicja formatu rozpoznawanego po nagłówku."""

    identifier: str
    name: str
    mime: str
    extension: str
    category: str
    matchers: Tuple[SignatureMatcher, ...]

    @property
    def media_type(self) -> MediaType:
        # Only the categories the pipeline acts on map to a concrete type.
        if self.category == "other":
            return MediaType.OTHER
        return _MIME_TO_TYPE.get(self.mime, MediaType.OTHER)

    def matches(self, data: bytes) -> bool:
        return all(matcher.matches(data) for matcher in self.matchers)


def _pattern_to_bytes(pattern: str, encoding: str | None) -> bytes:
    if encoding is None or encoding.lower() == "ascii":
        return pattern.encode("ascii")
    if encoding.lower() == "utf-8":
        return pattern.encode("utf-8")
    if encoding.lower() == "hex":
        return bytes.fromhex(pattern)
    raise ValueError(f"Nieobsługiwane kodowanie wzorca: {encoding}")


def _load_raw_config(path: Path | None = None) -> Iterable[dict]:
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as handle:
            return json.load(handle)
    with resources.files(_DATA_PACKAGE).joinpath(_DEFAULT_FILE).open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _parse_matchers(raw: Sequence[dict]) -> Tuple[SignatureMatcher, ...]:
    matchers: List[SignatureMatcher] = []
    for matcher in raw:
        pattern = _pattern_to_bytes(matcher["pattern"], matcher.get("encoding"))
        matchers.append(
            SignatureMatcher(
                type=matcher["type"],
                pattern=pattern,
                offset=matcher.get("offset"),
            )
        )
    if not matchers:
        raise ValueError("Sygnatura wymaga co najmniej jednego matchera")
    return tuple(matchers)


def _parse_signature(raw: dict) -> MediaSignature:
    category = raw.get("category", "other")
    if category not in _CATEGORIES:
        raise ValueError(f"Nieznana kategoria sygnatury: {category}")
    return MediaSignature(
        identifier=raw["id"],
        name=raw.get("name", raw["id"]),
        mime=raw["mime"],
        extension=raw.get("extension", "bin"),
        category=category,
        matchers=_parse_matchers(raw["matchers"]),
    )


def load_signatures(path: Path | None = None) -> List[MediaSignature]:
    """Wczytuje sygnatury z domyślnego zasobu lub wskazanego pliku.

    The order of the file is the evaluation order: the first signature that
    matches wins.
    """

    raw_config = _load_raw_config(path)
    return [_parse_signature(entry) for entry in raw_config]


@lru_cache(maxsize=1)
def load_default_signatures() -> Tuple[MediaSignature, ...]:
    """Wczytuje i cache'uje sygnatury z zasobu pakietu."""

    return tuple(load_signatures())


__all__ = [
    "MediaSignature",
    "SignatureMatcher",
    "load_default_signatures",
    "load_signatures",
]

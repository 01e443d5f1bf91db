"""Modele danych używane w rdzeniu aplikacji."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Protocol, Union

from media_blob.shared.buffers import decode_base64

if TYPE_CHECKING:
    from media_blob.detection.classifier import FormatClassifier
    from media_blob.detection.signatures import MediaSignature


class MediaType(str, Enum):
    """Typ wykryty na podstawie sygnatury (magic bytes)."""

    PNG = "image/png"
    JPEG = "image/jpeg"
    MP4 = "video/mp4"
    ZIP = "application/zip"
    OTHER = "other"
    UNKNOWN = "unknown"


class BlobKind(str, Enum):
    """Gałąź drzewa decyzyjnego wybrana przez klasyfikator."""

    ARCHIVE = "archive"
    MEDIA = "media"
    OPAQUE = "opaque"


MEDIA_TYPES = frozenset({MediaType.PNG, MediaType.JPEG, MediaType.MP4})
IMAGE_TYPES = frozenset({MediaType.PNG, MediaType.JPEG})


@dataclass(frozen=True, slots=True)
class Classification:
    """Wynik klasyfikacji bloba."""

    detected_type: MediaType
    signature: "MediaSignature | None" = None

    @property
    def kind(self) -> BlobKind:
        if self.detected_type is MediaType.ZIP:
            return BlobKind.ARCHIVE
        if self.detected_type in MEDIA_TYPES:
            return BlobKind.MEDIA
        return BlobKind.OPAQUE

    @property
    def is_image(self) -> bool:
        return self.detected_type in IMAGE_TYPES

    @property
    def is_mpeg4(self) -> bool:
        return self.detected_type is MediaType.MP4

    @property
    def is_video(self) -> bool:
        return self.is_mpeg4

    @property
    def is_media(self) -> bool:
        return self.is_image or self.is_video

    @property
    def is_archive(self) -> bool:
        return self.kind is BlobKind.ARCHIVE

    @property
    def mime_type(self) -> str | None:
        return self.signature.mime if self.signature is not None else None

    @property
    def extension(self) -> str | None:
        return self.signature.extension if self.signature is not None else None


@dataclass(frozen=True, slots=True)
class MediaUnit:
    """Sklasyfikowany, odszyfrowany wynik rozwiązania bloba.

    Flags are computed once from ``data`` when the unit is built and never
    change afterwards. ``overlay`` is reserved for video overlays and is
    always ``None`` for now.
    """

    data: bytes
    classification: Classification
    overlay: Optional[Union["MediaUnit", bytes]] = field(default=None, repr=False)

    @classmethod
    def from_bytes(cls, data: bytes, *, classifier: "FormatClassifier | None" = None) -> "MediaUnit":
        """Kopiuje dane i klasyfikuje je dokładnie raz."""

        if classifier is None:
            from media_blob.detection import default_classifier

            classifier = default_classifier()
        owned = bytes(data)
        return cls(data=owned, classification=classifier.classify(owned))

    @property
    def detected_type(self) -> MediaType:
        return self.classification.detected_type

    @property
    def is_image(self) -> bool:
        return self.classification.is_image

    @property
    def is_video(self) -> bool:
        return self.classification.is_video

    @property
    def is_mpeg4(self) -> bool:
        return self.classification.is_mpeg4

    @property
    def is_media(self) -> bool:
        return self.classification.is_media

    @property
    def mime_type(self) -> str | None:
        return self.classification.mime_type

    @property
    def extension(self) -> str | None:
        return self.classification.extension

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"MediaUnit(detected_type={self.detected_type.value!r}, size={self.size})"


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """Nazwany wpis kontenera rozwiązany do jednostki mediów."""

    name: str
    unit: MediaUnit


class MediaContext(Protocol):
    """Materiał kluczowy dostarczany przez sesję (story)."""

    @property
    def media_key(self) -> bytes: ...

    @property
    def media_iv(self) -> bytes: ...


@dataclass(frozen=True, slots=True)
class StoryContext:
    """Klucz i IV mediów jednej relacji (story)."""

    media_key: bytes = field(repr=False)
    media_iv: bytes = field(repr=False)

    @classmethod
    def from_base64(cls, media_key: str | bytes, media_iv: str | bytes) -> "StoryContext":
        """Tworzy kontekst z wartości zakodowanych w base64 (format API sesji)."""

        return cls(media_key=decode_base64(media_key), media_iv=decode_base64(media_iv))


ResolvedBlob = Union[MediaUnit, List[ArchiveEntry]]


__all__ = [
    "ArchiveEntry",
    "BlobKind",
    "Classification",
    "IMAGE_TYPES",
    "MEDIA_TYPES",
    "MediaContext",
    "MediaType",
    "MediaUnit",
    "ResolvedBlob",
    "StoryContext",
]

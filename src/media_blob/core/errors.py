"""Błędy zgłaszane przez potok rozwiązywania blobów."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import MediaUnit


class MediaBlobError(Exception):
    """Bazowy błąd pakietu."""


class EmptyInputError(MediaBlobError, ValueError):
    """Nie przekazano żadnych bajtów."""


class DecryptionFailure(MediaBlobError):
    """Szyfrogram, klucz lub IV są nieprawidłowe albo padding jest uszkodzony."""


class CorruptArchiveError(MediaBlobError):
    """Kontenera nie da się otworzyć ani wyliczyć jego wpisów."""


class ArchiveLimitError(CorruptArchiveError):
    """Archiwum przekracza skonfigurowane limity rozpakowywania."""


class UnrecognizedFormatError(MediaBlobError):
    """Bajty po wszystkich przekształceniach nie pasują do żadnego formatu mediów.

    The unit built from those bytes is kept on ``unit`` so the caller can
    inspect or log the raw data.
    """

    def __init__(self, message: str, *, unit: "MediaUnit | None" = None) -> None:
        super().__init__(message)
        self.unit = unit


__all__ = [
    "ArchiveLimitError",
    "CorruptArchiveError",
    "DecryptionFailure",
    "EmptyInputError",
    "MediaBlobError",
    "UnrecognizedFormatError",
]

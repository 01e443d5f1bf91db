"""media-blob: resolves story blobs into classified, decrypted media."""

from .core.errors import (
    ArchiveLimitError,
    CorruptArchiveError,
    DecryptionFailure,
    EmptyInputError,
    MediaBlobError,
    UnrecognizedFormatError,
)
from .core.models import ArchiveEntry, MediaType, MediaUnit, StoryContext
from .core.resolver import BlobResolver, decrypt, resolve_plain, resolve_with_context
from .detection import classify

__all__ = [
    "archive",
    "core",
    "crypto",
    "detection",
    "reporting",
    "shared",
    "ArchiveEntry",
    "ArchiveLimitError",
    "BlobResolver",
    "CorruptArchiveError",
    "DecryptionFailure",
    "EmptyInputError",
    "MediaBlobError",
    "MediaType",
    "MediaUnit",
    "StoryContext",
    "UnrecognizedFormatError",
    "classify",
    "decrypt",
    "resolve_plain",
    "resolve_with_context",
]

"""Warstwa logiki domenowej: modele, błędy i orkiestrator."""

from . import errors, models
from .errors import (
    ArchiveLimitError,
    CorruptArchiveError,
    DecryptionFailure,
    EmptyInputError,
    MediaBlobError,
    UnrecognizedFormatError,
)
from .models import ArchiveEntry, BlobKind, Classification, MediaContext, MediaType, MediaUnit, StoryContext

__all__ = [
	"errors",
	"models",
	"ArchiveEntry",
	"ArchiveLimitError",
	"BlobKind",
	"Classification",
	"CorruptArchiveError",
	"DecryptionFailure",
	"EmptyInputError",
	"MediaBlobError",
	"MediaContext",
	"MediaType",
	"MediaUnit",
	"StoryContext",
	"UnrecognizedFormatError",
]

"""Orkiestrator rozwiązywania blobów: klasyfikacja, deszyfrowanie, rozpakowanie.

Every public operation is a small decision tree over ``BlobKind``::

    start -> ARCHIVE  -> expand
          -> MEDIA    -> unit
          -> OPAQUE   -> (context) decrypt -> ARCHIVE | MEDIA | unrecognized
                         (plain)   unrecognized

Decryption happens at most once per call; decrypted output is classified
once more and never decrypted again.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

import structlog

from media_blob.archive import ArchiveExpander
from media_blob.crypto import Decryptor, decrypt_media
from media_blob.detection import FormatClassifier, default_classifier
from media_blob.shared.buffers import BytesLike, to_bytes
from media_blob.shared.config import ResolverConfig

from .errors import DecryptionFailure, EmptyInputError, UnrecognizedFormatError
from .models import ArchiveEntry, BlobKind, Classification, MediaContext, MediaType, MediaUnit, ResolvedBlob


class BlobResolver:
    """Łączy klasyfikator, silnik deszyfrowania i ekspander archiwów."""

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        classifier: FormatClassifier | None = None,
        decryptor: Decryptor | None = None,
        expander: ArchiveExpander | None = None,
    ) -> None:
        self._config = config or ResolverConfig.default()
        self._classifier = classifier or default_classifier()
        self._decryptor = decryptor or decrypt_media
        self._expander = expander or ArchiveExpander(self._config, classifier=self._classifier)
        self._logger = structlog.get_logger(__name__)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    # ------------------------------------------------------------------
    # Operacje publiczne
    # ------------------------------------------------------------------

    def resolve_plain(self, data: BytesLike | None) -> ResolvedBlob:
        """Rozwiązuje blob bez kontekstu deszyfrowania."""

        blob = self._require_input(data)
        classification = self._classifier.classify(blob)

        match classification.kind:
            case BlobKind.ARCHIVE:
                return self._expand(blob)
            case _:
                return self._finish(blob, classification, decrypted=False)

    def resolve_with_context(self, data: BytesLike | None, context: MediaContext) -> ResolvedBlob:
        """Rozwiązuje blob relacji, deszyfrując go, jeśli nie jest ani archiwum, ani mediami."""

        _require_context(context, "resolve_with_context")
        blob = self._require_input(data)
        return self._resolve_ciphertext(blob, context)

    def decrypt(self, data: BytesLike | None, context: MediaContext) -> ResolvedBlob:
        """Deszyfruje blob, o którym wywołujący wie, że jest szyfrogramem.

        An empty blob is malformed ciphertext and raises ``DecryptionFailure``.
        Bytes that already are an archive or media are passed through
        without decryption.
        """

        _require_context(context, "decrypt")
        blob = to_bytes(data)
        if not blob:
            raise DecryptionFailure("Pusty szyfrogram")
        return self._resolve_ciphertext(blob, context)

    # ------------------------------------------------------------------
    # Operacje pomocnicze
    # ------------------------------------------------------------------

    def _resolve_ciphertext(self, blob: bytes, context: MediaContext) -> ResolvedBlob:
        classification = self._classifier.classify(blob)

        match classification.kind:
            case BlobKind.ARCHIVE:
                return self._expand(blob)
            case BlobKind.MEDIA:
                return self._finish(blob, classification, decrypted=False)
            case _:
                plaintext = self._decrypt_once(blob, context)
                if not plaintext:
                    raise UnrecognizedFormatError(
                        "Odszyfrowane dane są puste",
                        unit=MediaUnit(data=b"", classification=Classification(detected_type=MediaType.UNKNOWN)),
                    )
                decrypted_classification = self._classifier.classify(plaintext)
                if decrypted_classification.is_archive:
                    return self._expand(plaintext)
                return self._finish(plaintext, decrypted_classification, decrypted=True)

    def _decrypt_once(self, blob: bytes, context: MediaContext) -> bytes:
        self._logger.debug("blob-decrypting", size=len(blob))
        try:
            plaintext = self._decryptor(blob, context.media_key, context.media_iv)
        except DecryptionFailure as exc:
            self._logger.warning("blob-decryption-failed", size=len(blob), error=str(exc))
            raise
        return bytes(plaintext)

    def _expand(self, blob: bytes) -> List[ArchiveEntry]:
        return self._expander.expand(blob)

    def _finish(self, blob: bytes, classification: Classification, *, decrypted: bool) -> MediaUnit:
        unit = MediaUnit(data=blob, classification=classification)
        if not unit.is_media:
            self._logger.info(
                "blob-unrecognized",
                size=unit.size,
                detected_type=unit.detected_type.value,
                decrypted=decrypted,
            )
            raise UnrecognizedFormatError("Nieznany format bloba", unit=unit)

        self._logger.debug("blob-resolved", size=unit.size, detected_type=unit.detected_type.value, decrypted=decrypted)
        return unit

    @staticmethod
    def _require_input(data: BytesLike | None) -> bytes:
        blob = to_bytes(data)
        if not blob:
            raise EmptyInputError("Pusty blob")
        return blob


def _require_context(context: MediaContext | None, operation: str) -> None:
    if context is None or not hasattr(context, "media_key") or not hasattr(context, "media_iv"):
        raise TypeError(f"{operation} wymaga kontekstu z media_key i media_iv")


@lru_cache(maxsize=1)
def default_resolver() -> BlobResolver:
    """Współdzielony resolver z domyślną konfiguracją (bez stanu między wywołaniami)."""

    return BlobResolver()


def resolve_plain(data: BytesLike | None) -> ResolvedBlob:
    return default_resolver().resolve_plain(data)


def resolve_with_context(data: BytesLike | None, context: MediaContext) -> ResolvedBlob:
    return default_resolver().resolve_with_context(data, context)


def decrypt(data: BytesLike | None, context: MediaContext) -> ResolvedBlob:
    return default_resolver().decrypt(data, context)


__all__ = [
    "BlobResolver",
    "decrypt",
    "default_resolver",
    "resolve_plain",
    "resolve_with_context",
]

"""Klasyfikator formatu oparty na tabeli sygnatur (magic bytes)."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Sequence

import structlog

from media_blob.core.errors import EmptyInputError
from media_blob.core.models import Classification, MediaType
from media_blob.shared.buffers import BytesLike, to_bytes

from .signatures import MediaSignature, load_default_signatures


class FormatClassifier:
    """Dopasowuje nagłówek bloba do uporządkowanej listy sygnatur.

    Signatures are evaluated in table order and the first match wins. The
    default table lists archive signatures first, then images, then video
    containers, so a blob is never reported as two things at once.
    """

    def __init__(
        self,
        *,
        signatures: Sequence[MediaSignature] | None = None,
        signature_ids: Iterable[str] | None = None,
    ) -> None:
        selected = list(signatures or load_default_signatures())
        if signature_ids is not None:
            ids = set(signature_ids)
            selected = [signature for signature in selected if signature.identifier in ids]

        if not selected:
            raise ValueError("FormatClassifier wymaga co najmniej jednej sygnatury")

        self._signatures = tuple(selected)
        self._logger = structlog.get_logger(__name__)

    @property
    def signatures(self) -> tuple[MediaSignature, ...]:
        return self._signatures

    def classify(self, data: BytesLike | None) -> Classification:
        data = to_bytes(data)
        if not data:
            raise EmptyInputError("Nie można sklasyfikować pustego bloba")

        for signature in self._signatures:
            if signature.matches(data):
                result = Classification(detected_type=signature.media_type, signature=signature)
                break
        else:
            result = Classification(detected_type=MediaType.UNKNOWN)

        self._logger.debug(
            "blob-classified",
            size=len(data),
            detected_type=result.detected_type.value,
            signature=result.signature.identifier if result.signature else None,
        )
        return result


@lru_cache(maxsize=1)
def default_classifier() -> FormatClassifier:
    """Klasyfikator z domyślną tabelą sygnatur (współdzielony, bezstanowy)."""

    return FormatClassifier()


def classify(data: BytesLike | None) -> Classification:
    """Klasyfikuje blob przy użyciu domyślnej tabeli sygnatur.

    Strings are encoded as UTF-8 before matching.
    """

    return default_classifier().classify(data)


__all__ = ["FormatClassifier", "classify", "default_classifier"]

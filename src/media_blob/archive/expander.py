"""Rozpakowywanie kontenerów ZIP do nazwanych jednostek mediów."""

from __future__ import annotations

import io
import struct
import zipfile
import zlib
from dataclasses import dataclass
from typing import List

import structlog

from media_blob.core.errors import ArchiveLimitError, CorruptArchiveError
from media_blob.core.models import ArchiveEntry, Classification, MediaType, MediaUnit
from media_blob.detection import FormatClassifier, default_classifier
from media_blob.shared.config import ResolverConfig

# zipfile reports damaged members through several unrelated exception types.
_ZIP_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    NotImplementedError,
    RuntimeError,
    EOFError,
    OSError,
    ValueError,
    struct.error,
    zlib.error,
)


@dataclass(slots=True)
class _ExpansionBudget:
    """Limity zużywane w trakcie jednego wywołania ``expand``."""

    entries_left: int
    bytes_left: int


class ArchiveExpander:
    """Wylicza pliki kontenera i rozwiązuje każdy z nich rekurencyjnie.

    Nested archives are flattened: the entries of ``inner.zip`` are returned
    as ``inner.zip/<member>``. Members are never decrypted. Expansion is
    atomic: any failure raises and no partial list escapes.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        classifier: FormatClassifier | None = None,
    ) -> None:
        self._config = config or ResolverConfig.default()
        self._classifier = classifier or default_classifier()
        self._logger = structlog.get_logger(__name__)

    def expand(self, data: bytes) -> List[ArchiveEntry]:
        budget = _ExpansionBudget(
            entries_left=self._config.max_archive_entries,
            bytes_left=self._config.max_decompressed_bytes,
        )
        entries = self._expand(bytes(data), prefix="", depth=1, budget=budget)
        self._logger.info(
            "archive-expanded",
            size=len(data),
            entries=len(entries),
            media=sum(1 for entry in entries if entry.unit.is_media),
        )
        return entries

    def _expand(self, data: bytes, *, prefix: str, depth: int, budget: _ExpansionBudget) -> List[ArchiveEntry]:
        if depth > self._config.max_archive_depth:
            raise ArchiveLimitError(
                f"Przekroczono maksymalną głębokość zagnieżdżenia archiwów ({self._config.max_archive_depth})"
            )

        entries: List[ArchiveEntry] = []
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                for info in self._unique_members(archive):
                    name = f"{prefix}/{info.filename}" if prefix else info.filename
                    member = self._read_member(archive, info, name, budget)
                    entries.extend(self._resolve_member(member, name=name, depth=depth, budget=budget))
        except CorruptArchiveError:
            raise
        except _ZIP_ERRORS as exc:
            self._logger.warning("archive-corrupt", prefix=prefix or None, depth=depth, error=str(exc))
            raise CorruptArchiveError(f"Nie można otworzyć archiwum: {exc}") from exc

        return entries

    @staticmethod
    def _unique_members(archive: zipfile.ZipFile) -> List[zipfile.ZipInfo]:
        """Pliki kontenera, po jednym na nazwę.

        A repeated name keeps the slot of its first occurrence and the content
        of its last one, so entry names are unique within one container.
        """

        members: dict[str, zipfile.ZipInfo] = {}
        for info in archive.infolist():
            if info.is_dir():
                continue
            members[info.filename] = info
        return list(members.values())

    def _read_member(
        self,
        archive: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        name: str,
        budget: _ExpansionBudget,
    ) -> bytes:
        if info.flag_bits & 0x1:
            raise CorruptArchiveError(f"Wpis {name!r} jest chroniony hasłem")

        if budget.entries_left <= 0:
            raise ArchiveLimitError(
                f"Przekroczono maksymalną liczbę wpisów ({self._config.max_archive_entries})"
            )
        budget.entries_left -= 1

        if info.file_size > budget.bytes_left:
            raise ArchiveLimitError(f"Wpis {name!r} przekracza limit rozmiaru po rozpakowaniu")

        # The declared size can lie, so the read itself is bounded as well.
        with archive.open(info) as handle:
            content = handle.read(budget.bytes_left + 1)
        if len(content) > budget.bytes_left:
            raise ArchiveLimitError(f"Wpis {name!r} przekracza limit rozmiaru po rozpakowaniu")
        budget.bytes_left -= len(content)
        return content

    def _resolve_member(self, content: bytes, *, name: str, depth: int, budget: _ExpansionBudget) -> List[ArchiveEntry]:
        if not content:
            # Empty members cannot be classified; keep them as plain units.
            return [ArchiveEntry(name=name, unit=MediaUnit(data=b"", classification=Classification(detected_type=MediaType.UNKNOWN)))]
        unit = MediaUnit.from_bytes(content, classifier=self._classifier)
        if unit.classification.is_archive:
            return self._expand(content, prefix=name, depth=depth + 1, budget=budget)
        if not unit.is_media:
            self._logger.debug("archive-member-not-media", name=name, detected_type=unit.detected_type.value)
        return [ArchiveEntry(name=name, unit=unit)]


__all__ = ["ArchiveExpander"]

"""Interfejsy eksportu raportów."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Protocol

from media_blob.core.models import ArchiveEntry, MediaUnit, ResolvedBlob


class ExportFormat(str, Enum):
    """Formaty eksportu raportów."""

    CSV = "csv"
    JSON = "json"


@dataclass(slots=True)
class ResolutionReport:
    """Podsumowanie rozwiązania jednego bloba."""

    source: str
    mode: str
    entries: List[ArchiveEntry] = field(default_factory=list)
    archive: bool = False

    @classmethod
    def from_result(cls, source: str, mode: str, result: ResolvedBlob) -> "ResolutionReport":
        if isinstance(result, MediaUnit):
            return cls(source=source, mode=mode, entries=[ArchiveEntry(name=Path(source).name, unit=result)])
        return cls(source=source, mode=mode, entries=list(result), archive=True)

    def total_media(self) -> int:
        """Liczba jednostek rozpoznanych jako media."""

        return sum(1 for entry in self.entries if entry.unit.is_media)


class ReportExporter(Protocol):
    """Interfejs dla mechanizmów eksportu."""

    def export(self, report: ResolutionReport, destination: Path, fmt: ExportFormat) -> Path:
        """Eksportuje wyniki do wybranego formatu i zwraca ścieżkę docelową."""

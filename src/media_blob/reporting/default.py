"""Domyślna implementacja eksportu raportów (CSV/JSON)."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, Iterator

from media_blob.core.models import ArchiveEntry
from .exporter import ExportFormat, ReportExporter, ResolutionReport

_FIELDNAMES = [
    "name",
    "size",
    "detected_type",
    "mime_type",
    "extension",
    "is_image",
    "is_video",
    "is_mpeg4",
    "is_media",
]


class DefaultReportExporter(ReportExporter):
    """Eksporter zapisujący wyniki rozwiązania do plików CSV lub JSON."""

    def export(self, report: ResolutionReport, destination: Path, fmt: ExportFormat) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)

        if fmt is ExportFormat.JSON:
            payload = self._build_json_payload(report)
            destination.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        elif fmt is ExportFormat.CSV:
            self._write_csv(report, destination)
        else:  # pragma: no cover - obsługa przyszłych formatów
            raise ValueError(f"Nieobsługiwany format eksportu: {fmt}")

        return destination

    def _build_json_payload(self, report: ResolutionReport) -> Dict[str, object]:
        return {
            "source": report.source,
            "mode": report.mode,
            "archive": report.archive,
            "totals": {
                "entries": len(report.entries),
                "media": report.total_media(),
            },
            "entries": [self._entry_to_dict(entry) for entry in report.entries],
        }

    @staticmethod
    def _entry_to_dict(entry: ArchiveEntry) -> Dict[str, object]:
        unit = entry.unit
        return {
            "name": entry.name,
            "size": unit.size,
            "detected_type": unit.detected_type.value,
            "mime_type": unit.mime_type,
            "extension": unit.extension,
            "is_image": unit.is_image,
            "is_video": unit.is_video,
            "is_mpeg4": unit.is_mpeg4,
            "is_media": unit.is_media,
        }

    def _write_csv(self, report: ResolutionReport, destination: Path) -> None:
        with destination.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=_FIELDNAMES)
            writer.writeheader()
            for row in self._iter_csv_rows(report):
                writer.writerow(row)

    def _iter_csv_rows(self, report: ResolutionReport) -> Iterator[Dict[str, object]]:
        for entry in report.entries:
            yield self._entry_to_dict(entry)


__all__ = ["DefaultReportExporter"]

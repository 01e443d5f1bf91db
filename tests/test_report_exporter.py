"""Testy eksportu raportów."""

from __future__ import annotations

import csv
import json

from conftest import JPEG_BYTES, MP4_BYTES, TEXT_BYTES
from media_blob.core.models import ArchiveEntry, MediaUnit
from media_blob.reporting import DefaultReportExporter, ExportFormat, ResolutionReport


def _sample_report() -> ResolutionReport:
    entries = [
        ArchiveEntry(name="media.mp4", unit=MediaUnit.from_bytes(MP4_BYTES)),
        ArchiveEntry(name="notes.txt", unit=MediaUnit.from_bytes(TEXT_BYTES)),
    ]
    return ResolutionReport.from_result("story.bin", "context", entries)


def test_report_from_single_unit_uses_source_name() -> None:
    report = ResolutionReport.from_result("/tmp/blobs/snap.bin", "plain", MediaUnit.from_bytes(JPEG_BYTES))

    assert report.archive is False
    assert [entry.name for entry in report.entries] == ["snap.bin"]
    assert report.total_media() == 1


def test_export_json(tmp_path) -> None:
    destination = tmp_path / "out" / "report.json"

    DefaultReportExporter().export(_sample_report(), destination, ExportFormat.JSON)

    payload = json.loads(destination.read_text(encoding="utf-8"))
    assert payload["source"] == "story.bin"
    assert payload["archive"] is True
    assert payload["totals"] == {"entries": 2, "media": 1}
    assert payload["entries"][0]["mime_type"] == "video/mp4"
    assert payload["entries"][0]["is_mpeg4"] is True
    assert payload["entries"][1]["detected_type"] == "unknown"


def test_export_csv(tmp_path) -> None:
    destination = tmp_path / "report.csv"

    DefaultReportExporter().export(_sample_report(), destination, ExportFormat.CSV)

    with destination.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["name"] for row in rows] == ["media.mp4", "notes.txt"]
    assert rows[0]["is_video"] == "True"
    assert rows[1]["is_media"] == "False"

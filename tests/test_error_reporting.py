from __future__ import annotations

from pathlib import Path

from conftest import MEDIA_KEY


def test_write_error_report_creates_file_and_redacts_keys(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("MEDIA_BLOB_ERROR_DIR", str(tmp_path))

    from media_blob.shared.error_reporting import write_error_report

    try:
        raise ValueError("boom")
    except ValueError as exc:
        report = write_error_report(
            exc,
            where="test",
            context={"media_key": "c2VjcmV0LWtleQ==", "media_iv": None, "blob": MEDIA_KEY, "mode": "plain"},
        )

    assert report.path.exists()
    assert report.path.parent == tmp_path
    text = report.path.read_text(encoding="utf-8", errors="replace")

    assert "boom" in text
    assert "ValueError" in text
    assert "c2VjcmV0LWtleQ==" not in text
    assert "<redacted>" in text
    assert "<32 bytes>" in text
    assert '"mode": "plain"' in text

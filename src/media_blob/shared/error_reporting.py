from __future__ import annotations

import json
import os
import platform
import sys
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from importlib import metadata
from pathlib import Path
from typing import Any
from uuid import uuid4

# Context keys whose values may carry key material.
_SECRET_KEYS = frozenset({"media_key", "media_iv", "key", "iv", "secret"})


@dataclass(frozen=True, slots=True)
class ErrorReport:
    path: Path
    created_at: datetime


def get_error_reports_dir() -> Path:
    """Returns a writable directory for error reports.

    Priority:
    1) `MEDIA_BLOB_ERROR_DIR` env var
    2) Windows: `%LOCALAPPDATA%/MediaBlob/error_reports` (or `%APPDATA%/...`)
    3) Other OS: `~/.media_blob/error_reports`
    """

    override = (os.getenv("MEDIA_BLOB_ERROR_DIR") or "").strip()
    base: Path
    if override:
        base = Path(override)
    elif os.name == "nt":
        root = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or str(Path.home())
        base = Path(root) / "MediaBlob" / "error_reports"
    else:
        base = Path.home() / ".media_blob" / "error_reports"

    base.mkdir(parents=True, exist_ok=True)
    return base


def _safe_app_version() -> str:
    try:
        return metadata.version("media-blob")
    except metadata.PackageNotFoundError:
        return "unknown"


def _sanitize_context(context: dict[str, Any]) -> dict[str, Any]:
    # Never include key material; only record that it was present.
    out: dict[str, Any] = {}
    for key, value in context.items():
        if key.lower() in _SECRET_KEYS:
            out[key] = "<redacted>" if value else None
        elif isinstance(value, (bytes, bytearray, memoryview)):
            out[key] = f"<{len(value)} bytes>"
        else:
            out[key] = value
    return out


def write_error_report(
    error: BaseException,
    *,
    where: str,
    context: dict[str, Any] | None = None,
) -> ErrorReport:
    """Writes a timestamped error report and returns its path."""

    reports_dir = get_error_reports_dir()
    created_at = datetime.now(timezone.utc)
    stamp = created_at.strftime("%Y%m%d_%H%M%S")
    name = f"error_{stamp}_{uuid4().hex[:8]}.txt"
    path = reports_dir / name

    header = {
        "created_at": created_at.isoformat(),
        "where": where,
        "app_version": _safe_app_version(),
        "python": sys.version.replace("\n", " "),
        "platform": platform.platform(),
        "cwd": str(Path.cwd()),
        "context": _sanitize_context(context or {}),
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))

    content = (
        "media-blob Error Report\n"
        "=======================\n\n"
        + json.dumps(header, ensure_ascii=False, indent=2, default=str)
        + "\n\nTraceback\n---------\n"
        + tb
    )

    path.write_text(content, encoding="utf-8", errors="replace")
    return ErrorReport(path=path, created_at=created_at)

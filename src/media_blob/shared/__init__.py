"""Moduły współdzielone: konfiguracja, logowanie, bufory."""

from .buffers import decode_base64, read_blob, to_bytes
from .config import ResolverConfig
from .error_reporting import ErrorReport, get_error_reports_dir, write_error_report
from .logging import configure_logging

__all__ = [
	"ResolverConfig",
	"configure_logging",
	"decode_base64",
	"ErrorReport",
	"get_error_reports_dir",
	"read_blob",
	"to_bytes",
	"write_error_report",
]

"""Eksport raportów z rozwiązanych blobów."""

from .default import DefaultReportExporter
from .exporter import ExportFormat, ReportExporter, ResolutionReport

__all__ = [
	"DefaultReportExporter",
	"ExportFormat",
	"ReportExporter",
	"ResolutionReport",
]

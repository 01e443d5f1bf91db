"""Rozpakowywanie archiwów z mediami."""

from .expander import ArchiveExpander

__all__ = ["ArchiveExpander"]

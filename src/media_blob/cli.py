"""Interfejs wiersza poleceń do rozwiązywania blobów z dysku."""

from __future__ import annotations

import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path, PurePosixPath

import structlog

from media_blob.core import (
    ArchiveEntry,
    MediaBlobError,
    MediaUnit,
    StoryContext,
    UnrecognizedFormatError,
)
from media_blob.core.resolver import BlobResolver
from media_blob.reporting import DefaultReportExporter, ExportFormat, ResolutionReport
from media_blob.shared import ResolverConfig, configure_logging, read_blob, write_error_report

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNRECOGNIZED = 2


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="media-blob",
        description="Klasyfikuje, deszyfruje i rozpakowuje bloby mediów relacji.",
    )
    parser.add_argument("source", type=Path, help="Ścieżka do pliku z blobem")
    parser.add_argument("--media-key", help="Klucz mediów relacji (base64)")
    parser.add_argument("--media-iv", help="IV mediów relacji (base64)")
    parser.add_argument(
        "--ciphertext",
        action="store_true",
        help="Traktuje blob jako szyfrogram (wymaga --media-key i --media-iv)",
    )
    parser.add_argument("--extract", type=Path, help="Katalog, do którego zostaną zapisane jednostki mediów")
    parser.add_argument("--report", type=Path, help="Ścieżka do pliku raportu")
    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Format raportu (domyślnie: json)",
    )
    parser.add_argument("--verbose", action="store_true", help="Wyświetla szczegółowe logi")
    return parser


def _build_context(args: Namespace) -> StoryContext | None:
    if args.media_key is None and args.media_iv is None:
        return None
    if args.media_key is None or args.media_iv is None:
        raise ValueError("--media-key i --media-iv muszą być podane razem")
    return StoryContext.from_base64(args.media_key, args.media_iv)


def _run(args: Namespace, *, resolver: BlobResolver | None = None) -> int:
    logger = structlog.get_logger(__name__)

    if not args.source.is_file():
        logger.error("source-not-found", path=str(args.source))
        return EXIT_ERROR

    try:
        context = _build_context(args)
    except ValueError as exc:
        logger.error("invalid-context", error=str(exc))
        return EXIT_ERROR

    if args.ciphertext and context is None:
        logger.error("ciphertext-requires-context")
        return EXIT_ERROR

    resolver = resolver or BlobResolver(ResolverConfig.from_env())
    mode = "decrypt" if args.ciphertext else ("context" if context is not None else "plain")

    try:
        data = read_blob(args.source)
        if mode == "decrypt":
            result = resolver.decrypt(data, context)
        elif mode == "context":
            result = resolver.resolve_with_context(data, context)
        else:
            result = resolver.resolve_plain(data)
    except UnrecognizedFormatError as exc:
        unit = exc.unit
        logger.error(
            "blob-unrecognized",
            path=str(args.source),
            size=unit.size if unit is not None else None,
        )
        return EXIT_UNRECOGNIZED
    except MediaBlobError as exc:
        logger.error("resolution-failed", path=str(args.source), error_type=type(exc).__name__, error=str(exc))
        return EXIT_ERROR
    except Exception as exc:  # pragma: no cover - błędy środowiskowe
        report = write_error_report(
            exc,
            where="cli.resolve",
            context={"source": str(args.source), "mode": mode, "media_key": args.media_key, "media_iv": args.media_iv},
        )
        logger.exception("resolution-crashed", error=str(exc), error_report=str(report.path))
        return EXIT_ERROR

    report = ResolutionReport.from_result(str(args.source), mode, result)

    try:
        if args.extract is not None:
            written = _extract(report, args.extract, single=isinstance(result, MediaUnit))
            logger.info("units-extracted", directory=str(args.extract), count=len(written))

        if args.report is not None:
            fmt = ExportFormat.JSON if args.format == "json" else ExportFormat.CSV
            DefaultReportExporter().export(report, args.report, fmt)
            logger.info("report-written", path=str(args.report), format=fmt.value)
    except OSError as exc:
        error_report = write_error_report(
            exc,
            where="cli.output",
            context={
                "source": str(args.source),
                "mode": mode,
                "extract": str(args.extract) if args.extract is not None else None,
                "report": str(args.report) if args.report is not None else None,
            },
        )
        logger.error("output-failed", error=str(exc), error_report=str(error_report.path))
        return EXIT_ERROR

    logger.info(
        "blob-resolved",
        path=str(args.source),
        mode=mode,
        archive=report.archive,
        entries=len(report.entries),
        media=report.total_media(),
    )
    return EXIT_OK


def _extract(report: ResolutionReport, directory: Path, *, single: bool) -> list[Path]:
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    taken: set[Path] = set()
    for entry in report.entries:
        target = _unique_target(directory / _safe_relative_path(entry, single=single), taken)
        taken.add(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(entry.unit.data)
        written.append(target)
    return written


def _unique_target(target: Path, taken: set[Path]) -> Path:
    """Dokleja licznik do nazwy, jeśli ścieżka została już zapisana w tym przebiegu."""

    candidate = target
    counter = 1
    while candidate in taken:
        candidate = target.with_name(f"{target.stem}-{counter}{target.suffix}")
        counter += 1
    return candidate


def _safe_relative_path(entry: ArchiveEntry, *, single: bool) -> Path:
    """Mapuje nazwę wpisu na ścieżkę, która nie wychodzi poza katalog docelowy."""

    parts = [part for part in PurePosixPath(entry.name.replace("\\", "/")).parts if part not in ("", ".", "..", "/")]
    if not parts:
        parts = ["blob"]
    relative = Path(*parts)
    if single and entry.unit.extension:
        relative = relative.with_suffix(f".{entry.unit.extension}")
    return relative


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=10 if args.verbose else 20)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())

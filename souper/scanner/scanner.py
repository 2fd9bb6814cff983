"""scan — walk a source tree and build a Snapshot of declared dependencies."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

# Ensure parsers are registered before any scan runs.
import souper.scanner.parsers  # noqa: F401
from souper.exceptions import ManifestParseError, ParseError, PathError, SouperIOError
from souper.scanner.models import DependencyRecord, Meta, Snapshot
from souper.scanner.registry import ManifestParser, discover_manifests

log = structlog.get_logger("souper.scanner")


def relative_path(file_path: Path, root: Path) -> str:
    """Return *file_path* relative to *root* with forward slashes."""
    try:
        return file_path.relative_to(root).as_posix()
    except ValueError as e:
        raise PathError(
            f"Not able to obtain relative path for: {file_path} (from {root})"
        ) from e


def read_manifest(file_path: Path) -> str:
    """Read a manifest as UTF-8 text (a leading BOM is dropped)."""
    try:
        return file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise SouperIOError(f"Not able to read file: {file_path} ({e})") from e


def parse_manifest(
    content: str, parsers: Iterable[ManifestParser], default_meta: Meta
) -> set[DependencyRecord]:
    """Run every applicable parser over *content* and union the results."""
    records: set[DependencyRecord] = set()
    for parser in parsers:
        records |= parser.parse(content, default_meta)
    return records


def scan(
    root: Path,
    exclude_dirs: Iterable[Path] = (),
    default_meta: Meta | None = None,
) -> Snapshot:
    """Scan *root* for manifests and return the fresh Snapshot.

    Any manifest that fails to parse aborts the scan with a
    :class:`ManifestParseError` naming its relative path.
    """
    root = Path(root)
    default_meta = default_meta or {}
    contexts: dict[str, set[DependencyRecord]] = {}

    for file_path, parsers in discover_manifests(root, exclude_dirs):
        context_path = relative_path(file_path, root)
        content = read_manifest(file_path)
        try:
            records = parse_manifest(content, parsers, default_meta)
        except ParseError as e:
            raise ManifestParseError(context_path, e) from e

        log.debug(
            "scanner.manifest_parsed",
            path=context_path,
            parsers=[p.detection_method for p in parsers],
            count=len(records),
        )
        contexts[context_path] = records

    log.info("scanner.done", root=str(root), manifests=len(contexts))
    return Snapshot(contexts=contexts)

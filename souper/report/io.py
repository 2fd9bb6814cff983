"""Read and write the persisted SOUP report.

The report is a JSON object keyed by relative manifest path, each value
an array of ``{"name", "version", "meta"}`` objects.  Paths and records
are written in sorted order so that re-running over an unchanged tree
produces a byte-identical file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import structlog
from pydantic import ValidationError

from souper.exceptions import ReportDecodeError, SouperIOError
from souper.report.schema import Report, ReportEntry
from souper.scanner.models import DependencyRecord, Snapshot

log = structlog.get_logger("souper.report")


def encode(snapshot: Snapshot) -> str:
    """Serialize *snapshot* as pretty-printed JSON."""
    document = {
        path: [ReportEntry.from_record(record).model_dump() for record in snapshot.records(path)]
        for path in snapshot.paths()
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def decode(text: str) -> Snapshot:
    """Parse a persisted report.

    Repeated name/version pairs under one path keep the first entry.
    """
    try:
        report = Report.model_validate_json(text)
    except ValidationError as e:
        raise ReportDecodeError(f"Invalid report ({e})") from e

    contexts: dict[str, set[DependencyRecord]] = {}
    for path, entries in report.root.items():
        records: set[DependencyRecord] = set()
        for entry in entries:
            # set.add keeps the element already present
            records.add(entry.to_record())
        contexts[path] = records
    return Snapshot(contexts=contexts)


def read_report(file_path: Path) -> Snapshot:
    """Load the report at *file_path*."""
    try:
        text = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SouperIOError(f"Not able to open file: {file_path} ({e})") from e
    try:
        return decode(text)
    except ReportDecodeError as e:
        raise ReportDecodeError(f"Not able to parse output file: {file_path} ({e})") from e


def write_report(snapshot: Snapshot, file_path: Path) -> None:
    """Write *snapshot* to *file_path*, replacing it atomically."""
    file_path = Path(file_path)
    payload = encode(snapshot)
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
        )
    except OSError as e:
        raise SouperIOError(f"Not able to create file: {file_path} ({e})") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(payload)
        # mkstemp creates owner-only files
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, file_path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise SouperIOError(f"Not able to write output-file: {file_path} ({e})") from e

    log.debug("report.written", path=str(file_path), manifests=len(snapshot))

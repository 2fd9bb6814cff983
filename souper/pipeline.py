"""run — read the prior report, rescan, reconcile, and persist."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from souper.exceptions import SouperIOError
from souper.report.io import read_report, write_report
from souper.report.reconcile import reconcile
from souper.scanner.models import Meta, Snapshot
from souper.scanner.scanner import scan

log = structlog.get_logger("souper.pipeline")


def load_base(output_file: Path) -> Snapshot:
    """The persisted report, or an empty Snapshot on a first run."""
    if not output_file.exists():
        return Snapshot.empty()
    if not output_file.is_file():
        raise SouperIOError(f"Invalid output file: {output_file}")
    return read_report(output_file)


def run(
    output_file: Path,
    root_dir: Path,
    exclude_dirs: Iterable[Path] = (),
    default_meta: Meta | None = None,
) -> Snapshot:
    """Full pipeline: load report -> scan -> reconcile -> write.

    Nothing is written unless every step succeeds.
    """
    output_file = Path(output_file)
    base = load_base(output_file)
    fresh = scan(Path(root_dir), exclude_dirs, default_meta)
    result = reconcile(base, fresh)

    write_report(result, output_file)
    log.info(
        "pipeline.report_written",
        output=str(output_file),
        added=len(fresh.contexts.keys() - base.contexts.keys()),
        pruned=len(base.contexts.keys() - fresh.contexts.keys()),
        kept=len(fresh.contexts.keys() & base.contexts.keys()),
    )
    return result

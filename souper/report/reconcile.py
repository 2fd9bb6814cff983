"""Reconcile a fresh scan against the previously persisted report.

The report always reflects what manifests declare *now*: paths and
dependencies that are gone get pruned and versions follow the latest
scan.  Annotations an operator added are carried over for as long as a
dependency of the same name is still declared at the same path, even
across a version bump.
"""

from __future__ import annotations

from dataclasses import replace

from souper.scanner.models import DependencyRecord, Meta, Snapshot


def combine_meta(base: Meta, fresh: Meta) -> Meta:
    """Merge metadata; every key already in *base* wins."""
    merged = dict(base)
    for key, value in fresh.items():
        merged.setdefault(key, value)
    return merged


def combine_records(
    base: set[DependencyRecord], fresh: set[DependencyRecord]
) -> set[DependencyRecord]:
    """Records of one path: versions from *fresh*, metadata carried over by name.

    A prior record with the same name and version is preferred; otherwise
    the last prior record of that name, in version order, supplies it.
    """
    by_identity = {(record.name, record.version): record.meta for record in base}
    by_name = {record.name: record.meta for record in sorted(base)}
    combined: set[DependencyRecord] = set()
    for record in fresh:
        prior = by_identity.get((record.name, record.version), by_name.get(record.name))
        if prior is not None:
            record = replace(record, meta=combine_meta(prior, record.meta))
        combined.add(record)
    return combined


def reconcile(base: Snapshot, fresh: Snapshot) -> Snapshot:
    """Compute the snapshot to persist from the prior report and a new scan.

    The result has exactly the paths of *fresh*.  Neither input is
    modified.
    """
    contexts: dict[str, set[DependencyRecord]] = {}
    for path, fresh_records in fresh.contexts.items():
        base_records = base.contexts.get(path)
        if base_records is None:
            contexts[path] = set(fresh_records)
        else:
            contexts[path] = combine_records(base_records, fresh_records)
    return Snapshot(contexts=contexts)

"""Parser registry — classify manifest files and walk a tree for them."""

from __future__ import annotations

import os
from collections.abc import Iterable
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Protocol, runtime_checkable

from souper.scanner.models import DependencyRecord, Meta


@runtime_checkable
class ManifestParser(Protocol):
    """Interface that every manifest parser must satisfy."""

    detection_method: str
    file_patterns: list[str]

    def parse(self, content: str, default_meta: Meta) -> set[DependencyRecord]: ...


PARSER_REGISTRY: dict[str, ManifestParser] = {}

# Build output and package caches never hold manifests we own.
GLOBAL_EXCLUDE_DIRS = frozenset({"node_modules", "bin", "obj"})


def register_parser(parser: ManifestParser) -> None:
    """Register a parser instance by its detection_method."""
    PARSER_REGISTRY[parser.detection_method] = parser


def parsers_for(file_name: str) -> list[ManifestParser]:
    """Return the parsers applicable to *file_name*, in registration order."""
    return [
        parser
        for parser in PARSER_REGISTRY.values()
        if any(fnmatchcase(file_name, pattern) for pattern in parser.file_patterns)
    ]


def _resolve_excludes(root: Path, exclude_dirs: Iterable[Path]) -> set[Path]:
    resolved: set[Path] = set()
    for ex in exclude_dirs:
        ex = Path(ex)
        if not ex.is_absolute():
            ex = root / ex
        resolved.add(ex.resolve())
    return resolved


def discover_manifests(
    root: Path, exclude_dirs: Iterable[Path] = ()
) -> list[tuple[Path, list[ManifestParser]]]:
    """Walk *root* and match manifest files to registered parsers.

    Directories named in :data:`GLOBAL_EXCLUDE_DIRS` and those listed in
    *exclude_dirs* (relative paths are taken from *root*) are skipped.
    Returns ``(file_path, parsers)`` pairs in sorted walk order.
    """
    root = Path(root)
    excluded = _resolve_excludes(root, exclude_dirs)
    matches: list[tuple[Path, list[ManifestParser]]] = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        # Prune in place so os.walk does not descend
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in GLOBAL_EXCLUDE_DIRS and (current / d).resolve() not in excluded
        )
        for name in sorted(filenames):
            parsers = parsers_for(name)
            if parsers:
                matches.append((current / name, parsers))

    return matches

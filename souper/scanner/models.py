"""Data models for the dependency scanner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Meta = dict[str, Any]


@dataclass(frozen=True, order=True)
class DependencyRecord:
    """A single dependency declared in a manifest file.

    Identity and ordering use ``(name, version)`` only.  Two records that
    differ only in ``meta`` are the same dependency, which is what lets a
    set of records be diffed and merged across scans.
    """

    name: str
    version: str
    meta: Meta = field(default_factory=dict, compare=False)

    @classmethod
    def with_defaults(cls, name: str, version: str, default_meta: Meta) -> DependencyRecord:
        """Build a freshly discovered record carrying its own copy of *default_meta*."""
        return cls(name=name, version=version, meta=dict(default_meta))


@dataclass(eq=False)
class Snapshot:
    """Mapping of relative manifest path to the dependencies declared there.

    Unlike :class:`DependencyRecord`, two snapshots are equal only when
    their records also carry the same ``meta``.
    """

    contexts: dict[str, set[DependencyRecord]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Snapshot:
        return cls()

    def paths(self) -> list[str]:
        return sorted(self.contexts)

    def records(self, path: str) -> list[DependencyRecord]:
        """Records at *path* in name/version order (empty if the path is unknown)."""
        return sorted(self.contexts.get(path, ()))

    def __len__(self) -> int:
        return len(self.contexts)

    def __contains__(self, path: object) -> bool:
        return path in self.contexts

    def _entries(self) -> dict[str, list[tuple[str, str, Meta]]]:
        return {
            path: [(r.name, r.version, r.meta) for r in self.records(path)]
            for path in self.contexts
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self._entries() == other._entries()

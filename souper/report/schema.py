"""Persisted report schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, RootModel

from souper.scanner.models import DependencyRecord


class ReportEntry(BaseModel):
    name: str
    version: str
    meta: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, record: DependencyRecord) -> ReportEntry:
        return cls(name=record.name, version=record.version, meta=record.meta)

    def to_record(self) -> DependencyRecord:
        return DependencyRecord(name=self.name, version=self.version, meta=self.meta)


class Report(RootModel[dict[str, list[ReportEntry]]]):
    """Top-level report: relative manifest path -> entries."""

"""Dependency scanner — extract declared SOUP from manifest files."""

from souper.scanner.models import DependencyRecord, Snapshot
from souper.scanner.scanner import scan

__all__ = ["DependencyRecord", "Snapshot", "scan"]

"""Report — reconcile scans against the persisted SOUP report."""

from souper.report.io import decode, encode, read_report, write_report
from souper.report.reconcile import reconcile

__all__ = ["decode", "encode", "read_report", "reconcile", "write_report"]

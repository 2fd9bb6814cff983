"""Shared pytest fixtures for souper tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path):
    """Write ``{relative_path: content}`` under tmp_path and return the root."""

    def _make(files: dict[str, str | bytes], root: Path | None = None) -> Path:
        root = root or tmp_path
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make

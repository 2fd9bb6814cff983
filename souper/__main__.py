"""CLI entry point: python -m souper"""

from __future__ import annotations

from souper.cli import main

if __name__ == "__main__":
    main()

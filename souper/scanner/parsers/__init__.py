"""Manifest parsers — auto-registered on import.

Import order is dispatch order: a Dockerfile is read for its base
images before its apt installs.
"""

from souper.scanner.parsers import (
    package_json,  # noqa: F401
    cargo_toml,  # noqa: F401
    csproj,  # noqa: F401
    docker_base,  # noqa: F401
    apt_install,  # noqa: F401
)

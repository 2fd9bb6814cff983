"""Parser for Rust Cargo.toml files."""

from __future__ import annotations

import sys
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from souper.exceptions import InvalidStructureError, MissingOrInvalidVersionError
from souper.scanner.models import DependencyRecord, Meta
from souper.scanner.registry import register_parser


def _parse_version(name: str, spec: Any) -> str:
    """Extract the version string from a dependency spec.

    A spec is either a bare version string or a table with a ``version`` key.
    """
    if isinstance(spec, str):
        return spec
    if isinstance(spec, dict):
        if "version" not in spec:
            raise MissingOrInvalidVersionError(name)
        version = spec["version"]
        if not isinstance(version, str):
            raise MissingOrInvalidVersionError(name, "Invalid version")
        return version
    raise MissingOrInvalidVersionError(name, "Malformed dependency")


class CargoTomlParser:
    detection_method = "cargo-toml"
    file_patterns = ["Cargo.toml"]

    def parse(self, content: str, default_meta: Meta) -> set[DependencyRecord]:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise InvalidStructureError(f"Invalid Cargo.toml ({e})") from e

        dep_table = data.get("dependencies", {})
        if not isinstance(dep_table, dict):
            raise InvalidStructureError("Invalid Cargo.toml ('dependencies' is not a table)")

        return {
            DependencyRecord.with_defaults(name, _parse_version(name, spec), default_meta)
            for name, spec in dep_table.items()
        }


register_parser(CargoTomlParser())

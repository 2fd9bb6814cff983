"""Parser for npm package.json files."""

from __future__ import annotations

import json

from souper.exceptions import InvalidStructureError
from souper.scanner.models import DependencyRecord, Meta
from souper.scanner.registry import register_parser


class PackageJsonParser:
    detection_method = "package-json"
    file_patterns = ["package.json"]

    def parse(self, content: str, default_meta: Meta) -> set[DependencyRecord]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidStructureError(f"Invalid package.json ({e})") from e

        if not isinstance(data, dict):
            raise InvalidStructureError("Invalid package.json (top level is not an object)")

        # Manifests without runtime dependencies simply omit the key
        dependencies = data.get("dependencies", {})
        if not isinstance(dependencies, dict):
            raise InvalidStructureError("Invalid package.json ('dependencies' is not an object)")

        deps: set[DependencyRecord] = set()
        for name, version in dependencies.items():
            if not isinstance(version, str):
                raise InvalidStructureError(f"Invalid version for: {name}")
            deps.add(DependencyRecord.with_defaults(name, version, default_meta))

        return deps


register_parser(PackageJsonParser())

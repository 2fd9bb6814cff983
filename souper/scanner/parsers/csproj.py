"""Parser for .NET project files (PackageReference items)."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from souper.exceptions import (
    AttributeEncodingError,
    InvalidStructureError,
    MissingAttributeError,
)
from souper.scanner.models import DependencyRecord, Meta
from souper.scanner.registry import register_parser

_PACKAGE_REFERENCE = "PackageReference"


def _local_name(tag: str) -> str:
    # Legacy project files put everything in the MSBuild namespace
    return tag.rsplit("}", 1)[-1]


def _attribute(element: ET.Element, key: str) -> str:
    value = element.get(key)
    if value is None:
        raise MissingAttributeError(key)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise AttributeEncodingError(f"Unable to parse attribute {key} as utf8") from e
    return value


class CsprojParser:
    detection_method = "csproj"
    file_patterns = ["*.csproj*"]

    def parse(self, content: str, default_meta: Meta) -> set[DependencyRecord]:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise InvalidStructureError(f"Invalid XML structure ({e})") from e
        except UnicodeEncodeError as e:
            raise AttributeEncodingError(f"Invalid XML structure ({e})") from e

        deps: set[DependencyRecord] = set()
        for element in root.iter():
            if not isinstance(element.tag, str) or _local_name(element.tag) != _PACKAGE_REFERENCE:
                continue
            name = _attribute(element, "Include")
            version = _attribute(element, "Version")
            deps.add(DependencyRecord.with_defaults(name, version, default_meta))

        return deps


register_parser(CsprojParser())

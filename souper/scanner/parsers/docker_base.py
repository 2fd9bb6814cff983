"""Parser for Dockerfile ``FROM`` lines (container base images)."""

from __future__ import annotations

import re

from souper.scanner.models import DependencyRecord, Meta
from souper.scanner.registry import register_parser

# FROM [--platform=<p>] [registry[:port]/]path[/more][:tag][@digest] [AS alias]
_FROM_RE = re.compile(
    r"^\s*FROM\s+"
    r"(?:--platform=\S+\s+)?"
    r"(?P<name>"
    r"(?:[a-z0-9][a-z0-9.\-]*(?::\d+)?/)?"  # registry host, optional port
    r"[a-z0-9._\-]+(?:/[a-z0-9._\-]+)*"  # repository path
    r")"
    r"(?::(?P<tag>[a-z0-9_][a-z0-9_.\-]*))?"
    r"(?:@(?P<digest>[a-z0-9_+.\-]+:[a-f0-9]+))?"
    r"(?:\s+AS\s+[a-z0-9_.\-]+)?"
    r"\s*$",
    re.IGNORECASE,
)


class DockerBaseParser:
    detection_method = "docker-base"
    file_patterns = ["*Dockerfile*"]

    def parse(self, content: str, default_meta: Meta) -> set[DependencyRecord]:
        deps: set[DependencyRecord] = set()

        for line in content.splitlines():
            m = _FROM_RE.match(line)
            if not m:
                continue
            # name:tag@digest reports the digest
            version = m.group("digest") or m.group("tag")
            if version is None:
                continue
            deps.add(DependencyRecord.with_defaults(m.group("name"), version, default_meta))

        return deps


register_parser(DockerBaseParser())

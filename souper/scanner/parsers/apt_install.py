"""Parser for ``apt`` / ``apt-get install`` statements in Dockerfiles."""

from __future__ import annotations

import re

from souper.scanner.models import DependencyRecord, Meta
from souper.scanner.registry import register_parser

UNKNOWN_VERSION = "unknown"

# A trailing backslash joins the next line; a comment may follow it
_CONTINUATION_RE = re.compile(r"\\[ \t]*(?:#[^\n]*)?\r?\n")
_HSPACE_RE = re.compile(r"[ \t]+")

# Dockerfile comment lines are dropped before continuations are joined
_COMMENT_LINE_RE = re.compile(r"^[ \t]*#[^\n]*(?:\n|\Z)", re.MULTILINE)

# A shell comment starts at a word beginning with "#"
_INLINE_COMMENT_RE = re.compile(r"(?:^|\s)#.*$")

# Shell operators separate commands on one logical line
_COMMAND_SEP_RE = re.compile(r"&&|\|\||[;|&()]")

# apt[-get] [options] install [options] <packages...>
_INSTALL_RE = re.compile(r"\bapt(?:-get)?(?: -\S+)* install\b(?P<args>.*)")

# Options whose value is the following word
_OPTIONS_WITH_VALUE = frozenset({"-t", "-o", "-c", "--target-release", "--option", "--config-file"})

_PACKAGE_RE = re.compile(
    r"^(?P<name>[a-z0-9][a-z0-9+.\-]*)(?:=(?P<version>[a-z0-9*][a-z0-9.+~:_*\-]*))?$",
    re.IGNORECASE,
)


def normalize(content: str) -> str:
    """Fold continuation lines into one logical line and squeeze blanks."""
    content = _COMMENT_LINE_RE.sub("", content)
    content = _CONTINUATION_RE.sub(" ", content)
    return _HSPACE_RE.sub(" ", content)


class AptInstallParser:
    detection_method = "apt-install"
    file_patterns = ["*Dockerfile*"]

    def parse(self, content: str, default_meta: Meta) -> set[DependencyRecord]:
        deps: set[DependencyRecord] = set()

        for line in normalize(content).splitlines():
            if line.lstrip().startswith("#"):
                continue
            line = _INLINE_COMMENT_RE.sub("", line)
            for command in _COMMAND_SEP_RE.split(line):
                m = _INSTALL_RE.search(command)
                if not m:
                    continue
                tokens = iter(m.group("args").split())
                for token in tokens:
                    if token.startswith("#"):
                        break
                    if token.startswith("-"):
                        if token in _OPTIONS_WITH_VALUE:
                            next(tokens, None)
                        continue
                    pkg = _PACKAGE_RE.match(token)
                    if not pkg:
                        continue
                    deps.add(
                        DependencyRecord.with_defaults(
                            pkg.group("name"),
                            pkg.group("version") or UNKNOWN_VERSION,
                            default_meta,
                        )
                    )

        return deps


register_parser(AptInstallParser())

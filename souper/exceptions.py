"""Custom exceptions for souper."""

from __future__ import annotations


class SouperError(Exception):
    """Base exception for all souper errors."""


class ParseError(SouperError):
    """Raised when a manifest cannot be turned into dependency records."""


class InvalidStructureError(ParseError):
    """Raised when content is not parseable as the expected grammar."""


class AttributeEncodingError(InvalidStructureError):
    """Raised when an attribute value is not valid UTF-8 text."""


class MissingAttributeError(ParseError):
    """Raised when a required XML attribute is absent."""

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"Missing required attribute: {attribute}")


class MissingOrInvalidVersionError(ParseError):
    """Raised when a dependency entry has no usable version string."""

    def __init__(self, dependency: str, reason: str = "Missing version"):
        self.dependency = dependency
        super().__init__(f"{reason} for: {dependency}")


class ManifestParseError(SouperError):
    """Raised when a discovered manifest fails to parse."""

    def __init__(self, path: str, error: ParseError):
        self.path = path
        self.error = error
        super().__init__(f"Unable to parse {path} due to: {error}")


class SouperIOError(SouperError):
    """Raised when a file cannot be read or the report cannot be written."""


class ReportDecodeError(SouperIOError):
    """Raised when the persisted report does not parse."""


class PathError(SouperError):
    """Raised when a discovered file cannot be expressed relative to the scan root."""

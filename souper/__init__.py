"""souper — inventory software of unknown provenance (SOUP) declared in a source tree."""

__version__ = "0.4.0"

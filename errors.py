# errors.py
"""Error taxonomy shared by the ontology, the conversion layer and the parsers."""

from __future__ import annotations
from typing import Any, Optional


class OntologyError(Exception):
    """Base class for every error raised by this package."""


class ParsingError(OntologyError, ValueError):
    """Wire data (identifiers, serialized entities) could not be decoded."""


class UnknownIdentifier(ParsingError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Unknown EntityKind identifier: {identifier}")


class ConversionError(OntologyError):
    """A single raw engine match cannot be normalized into the value model.

    Always local to one match: the parser drops the match and keeps going.
    """

    def __init__(self, reason: str, match: Optional[Any] = None):
        self.reason = reason
        self.match = match
        super().__init__(reason)


class UnsupportedLanguageError(OntologyError, ValueError):
    def __init__(self, language: Any):
        self.language = language
        super().__init__(f"Unsupported language: {language!r}")


class EngineError(OntologyError):
    """The parsing engine failed to build or to run for a language."""

    def __init__(self, language: Any, reason: str):
        self.language = language
        self.reason = reason
        super().__init__(f"Engine error for language {language}: {reason}")


class EncodingError(OntologyError):
    """Static example data could not be serialized (a programming defect)."""

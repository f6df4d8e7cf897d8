"""Exception hierarchy for text-itemizer."""

from __future__ import annotations


class TextItemizerError(Exception):
    """Base class for all text-itemizer errors."""


class InvalidTextError(TextItemizerError, ValueError):
    """Input text violates an itemization precondition.

    Raised for empty strings and strings containing line breaks. These are
    caller programming errors, not recoverable runtime states.
    """


class InvariantError(TextItemizerError, AssertionError):
    """An internal contract was broken (zero-length run, bad scan bound, gaps)."""


class BidiAnalysisError(TextItemizerError):
    """The bidi engine failed on a paragraph.

    Always recovered by the itemizer, which degrades to a single sentinel run.
    """

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


class ConfigError(TextItemizerError):
    """Invalid configuration file or value."""


class ShapingError(TextItemizerError):
    """A font could not be loaded for shaping."""

    def __init__(self, message: str, font_path: str | None = None):
        super().__init__(message)
        self.font_path = font_path

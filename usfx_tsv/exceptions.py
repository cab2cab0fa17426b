"""Package-specific exception types."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for conversion-related errors.

    Represents errors that abort a USFX to TSV conversion. Output already
    written to the sink is not rolled back.
    """


class SourceError(ConversionError):
    """Raised when the input document cannot be opened or read."""


class MarkupError(ConversionError):
    """Raised when the tokenizer reports malformed markup.

    Args:
        message: Description reported by the XML parser.
        line: One-based line of the offending markup, when known.
        column: One-based column of the offending markup, when known.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        super().__init__(self._build_message(message))

    def _build_message(self, message: str) -> str:
        if self.line is None:
            return message
        if self.column is None:
            return f"Line {self.line}: {message}"
        return f"Line {self.line}, column {self.column}: {message}"


class EncodingError(ConversionError):
    """Raised when text cannot be decoded or a fragment cannot be written."""

"""Verse reference parsing for USFX ``bcv`` attributes."""

from __future__ import annotations

from .constants import REFERENCE_SEPARATOR
from .models import VerseReference


def parse_reference(value: str) -> VerseReference | None:
    """Parse a dot-delimited ``Book.Chapter.Verse`` reference.

    Surrounding whitespace is ignored. The value must split into exactly three
    components; anything else yields None so the verse can be skipped.

    Args:
        value: Raw ``bcv`` attribute value.

    Returns:
        VerseReference | None: Parsed reference, or None when the value does
            not have exactly three components.

    Examples:
        parse_reference("GEN.1.1")  # VerseReference("GEN", "1", "1")
        parse_reference("GEN.1")  # None
    """
    parts = value.strip().split(REFERENCE_SEPARATOR)
    if len(parts) != 3:
        return None
    book, chapter, verse = parts
    return VerseReference(book=book, chapter=chapter, verse=verse)

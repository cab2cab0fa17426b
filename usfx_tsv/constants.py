"""Constants used across the usfx-tsv package."""

from __future__ import annotations

from .models import ParserState

# USFX element names
BOOK_TAG = "book"
PARAGRAPH_TAG = "p"
SECTION_TAG = "s"
WORD_TAG = "w"
VERSE_TAG = "v"
VERSE_END_TAG = "ve"
FOOTNOTE_TAG = "f"
CROSS_REFERENCE_TAG = "x"
KNOWN_TAGS = frozenset(
    {
        BOOK_TAG,
        PARAGRAPH_TAG,
        SECTION_TAG,
        WORD_TAG,
        VERSE_TAG,
        VERSE_END_TAG,
        FOOTNOTE_TAG,
        CROSS_REFERENCE_TAG,
    }
)

REFERENCE_ATTRIBUTE = "bcv"
REFERENCE_SEPARATOR = "."

# Suppressing regions and the state each one puts the interpreter in
SUPPRESSING_TAGS = {
    SECTION_TAG: ParserState.IN_SECTION,
    FOOTNOTE_TAG: ParserState.IN_FOOTNOTE,
    CROSS_REFERENCE_TAG: ParserState.IN_CROSS_REFERENCE,
}
SUPPRESSED_STATES = frozenset(
    {
        ParserState.BOOK,
        ParserState.IN_SECTION,
        ParserState.IN_FOOTNOTE,
        ParserState.IN_CROSS_REFERENCE,
    }
)

# Output framing
RECORD_TERMINATOR = "\n"
LINE_BREAK_TEXT = "\n"
LINE_BREAK_MARKER = "^"
WORD_SEPARATOR = " "

# Input handling
DEFAULT_BUFFER_SIZE = 8192
USFX_EXTENSIONS = (".xml", ".usfx")

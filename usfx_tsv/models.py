"""Data models for usfx-tsv."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ParserState(Enum):
    """Semantic region the interpreter is currently in.

    Exactly one state is active at a time.

    Attributes:
        INITIAL: Outside any recognized region.
        BOOK: Inside a ``book`` element, before any verse body.
        IN_VERSE: Inside a verse body.
        IN_WORD: Inside a ``w`` word token.
        IN_SECTION: Inside an ``s`` section heading.
        IN_FOOTNOTE: Inside an ``f`` footnote.
        IN_CROSS_REFERENCE: Inside an ``x`` cross-reference.
        VERSE_END: Inside a paired ``ve`` element.
    """

    INITIAL = auto()
    BOOK = auto()
    IN_VERSE = auto()
    IN_WORD = auto()
    IN_SECTION = auto()
    IN_FOOTNOTE = auto()
    IN_CROSS_REFERENCE = auto()
    VERSE_END = auto()


class EventKind(Enum):
    """Kinds of events produced by the tokenizer."""

    START = auto()
    END = auto()
    EMPTY = auto()
    TEXT = auto()
    EOF = auto()


@dataclass(frozen=True)
class Event:
    """A single tokenizer event.

    Attributes:
        kind: Event kind.
        name: Local tag name for tag events, empty otherwise.
        attributes: Tag attributes for start and empty events.
        text: Character data for text events.
    """

    kind: EventKind
    name: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""


@dataclass(frozen=True)
class VerseReference:
    """Three-part verse reference parsed from a ``bcv`` attribute.

    Attributes:
        book: Book code, e.g. ``GEN``.
        chapter: Chapter token.
        verse: Verse token.
    """

    book: str
    chapter: str
    verse: str

    @property
    def prefix(self) -> str:
        """Reference fields as written at the start of a TSV record."""
        return f"{self.book}\t{self.chapter}\t{self.verse}\t"


@dataclass
class ParserContext:
    """Encapsulate interpreter state while walking a USFX event stream.

    Attributes:
        state: Current parser state.
        last_state: State observed at the previous text event.
        content: Whether a verse record is open for text emission.
        reference: Reference of the record currently being written, if any.
        suppressed: Stack of open suppressing tag names (``s``, ``f``, ``x``).
        records: Number of records closed so far.
    """

    state: ParserState = ParserState.INITIAL
    last_state: ParserState = ParserState.INITIAL
    content: bool = False
    reference: VerseReference | None = None
    suppressed: list[str] = field(default_factory=list)
    records: int = 0

    @property
    def emitting(self) -> bool:
        """True when text is eligible for output."""
        return self.content and not self.suppressed

"""Text emission policy.

Decides, from the current and previous parser states, whether a text payload
is written and how it is joined to the text before it.
"""

from __future__ import annotations

from .constants import (
    LINE_BREAK_MARKER,
    LINE_BREAK_TEXT,
    SUPPRESSED_STATES,
    WORD_SEPARATOR,
)
from .models import ParserState


def decide_fragment(
    text: str, state: ParserState, last_state: ParserState, content: bool
) -> str | None:
    """Decide the output fragment for a text payload.

    Rules, in order:

    1. Nothing is written when `content` is False or `state` is a suppressed
       state (book, section, footnote, cross-reference).
    2. Inside a verse body the text is written verbatim, except that a payload
       of exactly one newline becomes ``^`` so records stay on one line.
    3. Inside a word token the text is written without a separator when it is
       the first token of the record, dropped when the previous text event was
       in the same word (continuation fragment), and prefixed with a single
       space otherwise.
    4. Any other state writes nothing.

    Args:
        text: Text payload.
        state: Current parser state.
        last_state: Parser state at the previous text event.
        content: Whether a verse record is open and not suppressed.

    Returns:
        str | None: Fragment to write, or None when nothing is written.

    Examples:
        decide_fragment("In", ParserState.IN_WORD, ParserState.INITIAL, True)  # "In"
        decide_fragment("the", ParserState.IN_WORD, ParserState.IN_VERSE, True)  # " the"
        decide_fragment("\\n", ParserState.IN_VERSE, ParserState.IN_VERSE, True)  # "^"
    """
    if not content or state in SUPPRESSED_STATES:
        return None

    if state is ParserState.IN_VERSE:
        if text == LINE_BREAK_TEXT:
            return LINE_BREAK_MARKER
        return text

    if state is ParserState.IN_WORD:
        if last_state is ParserState.INITIAL:
            return text
        if last_state is ParserState.IN_WORD:
            return None
        return f"{WORD_SEPARATOR}{text}"

    return None

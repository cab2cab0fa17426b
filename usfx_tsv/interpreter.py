"""Tag event interpreter.

Drives a `ParserContext` through one tokenizer event at a time and returns
the output fragments the event produces. No I/O happens here.
"""

from __future__ import annotations

from collections.abc import Callable

from .constants import (
    BOOK_TAG,
    RECORD_TERMINATOR,
    REFERENCE_ATTRIBUTE,
    SECTION_TAG,
    SUPPRESSING_TAGS,
    VERSE_END_TAG,
    VERSE_TAG,
    WORD_TAG,
)
from .emission import decide_fragment
from .models import Event, EventKind, ParserContext, ParserState
from .reference import parse_reference


def _try_enter_region(ctx: ParserContext, name: str) -> bool:
    """Enter a section, footnote, or cross-reference region.

    Args:
        ctx: Parser context to update.
        name: Start tag name.

    Returns:
        bool: True when `name` opens a suppressing region.
    """
    region_state = SUPPRESSING_TAGS.get(name)
    if region_state is None:
        return False

    ctx.suppressed.append(name)
    ctx.state = region_state
    if name == SECTION_TAG:
        ctx.content = False
    return True


def _try_exit_region(ctx: ParserContext, name: str) -> bool:
    """Leave a suppressing region.

    Resumes the state of the enclosing suppressing region when regions are
    nested, otherwise falls back to `ParserState.INITIAL`.

    Args:
        ctx: Parser context to update.
        name: End tag name.

    Returns:
        bool: True when `name` closes a suppressing region.
    """
    if name not in SUPPRESSING_TAGS:
        return False

    if ctx.suppressed and ctx.suppressed[-1] == name:
        ctx.suppressed.pop()
    ctx.state = SUPPRESSING_TAGS[ctx.suppressed[-1]] if ctx.suppressed else ParserState.INITIAL
    return True


def _close_record(ctx: ParserContext) -> list[str]:
    """Close the open record, if any, and disable content."""
    ctx.state = ParserState.INITIAL
    ctx.content = False
    if ctx.reference is None:
        return []
    ctx.reference = None
    ctx.records += 1
    return [RECORD_TERMINATOR]


def _report_unterminated(ctx: ParserContext, debug: Callable[[str], None] | None) -> None:
    """Report an open record that never saw a verse-end marker.

    Only a verse-end marker writes the line terminator, so such a record runs
    on into whatever follows it.
    """
    if ctx.reference is None or debug is None:
        return
    reference = ctx.reference
    debug(f"Verse {reference.book}.{reference.chapter}.{reference.verse} has no verse-end marker")


def _apply_start(ctx: ParserContext, name: str) -> None:
    if _try_enter_region(ctx, name):
        return

    if name == BOOK_TAG:
        ctx.state = ParserState.BOOK
    elif name == WORD_TAG:
        if ctx.content:
            ctx.state = ParserState.IN_WORD
    elif name == VERSE_TAG:
        if ctx.content:
            ctx.state = ParserState.IN_VERSE
    elif name == VERSE_END_TAG:
        ctx.state = ParserState.VERSE_END


def _apply_end(ctx: ParserContext, name: str) -> list[str]:
    if _try_exit_region(ctx, name):
        return []

    if name == WORD_TAG:
        ctx.state = ParserState.IN_VERSE
        # The word is finished; the next token must not read as a continuation.
        if ctx.last_state is ParserState.IN_WORD:
            ctx.last_state = ParserState.IN_VERSE
    elif name == VERSE_TAG:
        ctx.state = ParserState.IN_VERSE
    elif name == VERSE_END_TAG:
        return _close_record(ctx)
    return []


def _apply_empty(
    ctx: ParserContext, event: Event, debug: Callable[[str], None] | None
) -> list[str]:
    if event.name == VERSE_END_TAG:
        return _close_record(ctx)

    if event.name != VERSE_TAG:
        return []

    raw_reference = event.attributes.get(REFERENCE_ATTRIBUTE)
    if raw_reference is None:
        return []

    reference = parse_reference(raw_reference)
    if reference is None:
        if debug is not None:
            debug(f"Skipping verse with malformed reference {raw_reference!r}")
        return []

    _report_unterminated(ctx, debug)

    ctx.reference = reference
    ctx.content = True
    ctx.state = ParserState.IN_VERSE
    ctx.last_state = ParserState.INITIAL
    return [reference.prefix]


def _apply_text(ctx: ParserContext, text: str) -> list[str]:
    fragment = decide_fragment(text, ctx.state, ctx.last_state, ctx.emitting)
    ctx.last_state = ctx.state
    return [fragment] if fragment else []


def apply_event(
    ctx: ParserContext, event: Event, debug: Callable[[str], None] | None = None
) -> list[str]:
    """Advance the interpreter by one event.

    Start and end tags only move the state. Self-closing ``v`` markers with a
    ``bcv`` attribute open a record and produce its reference prefix;
    self-closing ``ve`` markers (and paired ``ve`` end tags) close it with a
    line terminator. No other event writes a terminator: a verse without a
    verse-end marker runs on into the next record. Text events go through the
    emission policy. Unknown tag names leave the context untouched.

    Args:
        ctx: Parser context, updated in place.
        event: Tokenizer event to apply.
        debug: Optional callback receiving diagnostic messages.

    Returns:
        list[str]: Fragments to write to the output, in order.

    Examples:
        ctx = ParserContext()
        apply_event(ctx, Event(EventKind.EMPTY, "v", {"bcv": "GEN.1.1"}))  # ["GEN\\t1\\t1\\t"]
    """
    if event.kind is EventKind.TEXT:
        return _apply_text(ctx, event.text)
    if event.kind is EventKind.START:
        _apply_start(ctx, event.name)
        return []
    if event.kind is EventKind.END:
        return _apply_end(ctx, event.name)
    if event.kind is EventKind.EMPTY:
        return _apply_empty(ctx, event, debug)
    if event.kind is EventKind.EOF:
        _report_unterminated(ctx, debug)
    return []

"""USFX to TSV conversion."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import BinaryIO, TextIO

from .config import UsfxConfig, validate_config
from .constants import KNOWN_TAGS
from .exceptions import EncodingError
from .filesystem import safe_open
from .interpreter import apply_event
from .models import Event, EventKind, ParserContext
from .tokenizer import iter_events


def convert_events(
    events: Iterable[Event],
    debug: Callable[[str], None] | None = None,
    ctx: ParserContext | None = None,
) -> Iterator[str]:
    """Interpret a stream of tokenizer events and yield output fragments.

    Args:
        events: Tokenizer events, normally ending with `EventKind.EOF`.
        debug: Optional callback receiving diagnostic messages.
        ctx: Parser context to drive; a fresh one is used when omitted.

    Yields:
        str: Reference prefixes, text fragments, and record terminators in
            document order.

    Examples:
        "".join(convert_events(iter_events(source)))
    """
    ctx = ctx if ctx is not None else ParserContext()
    unknown_tags: set[str] = set()

    for event in events:
        if (
            debug is not None
            and event.kind in (EventKind.START, EventKind.EMPTY)
            and event.name not in KNOWN_TAGS
            and event.name not in unknown_tags
        ):
            unknown_tags.add(event.name)
            debug(f"Ignoring unknown tag <{event.name}>")

        yield from apply_event(ctx, event, debug)


def convert_stream(
    source: BinaryIO,
    sink: TextIO,
    config: UsfxConfig | None = None,
    debug: Callable[[str], None] | None = None,
) -> int:
    """Convert a binary USFX stream, writing TSV records to `sink` as they form.

    Output is streamed: a failure part-way through leaves the fragments already
    written in place, and nothing more is written after the failure.

    Args:
        source: Binary stream holding the USFX document.
        sink: Text stream receiving the TSV output.
        config: Conversion settings. Defaults to a new `UsfxConfig`.
        debug: Callback for diagnostics, used only when `config.debug_output`
            is enabled.

    Returns:
        int: Number of records written.

    Raises:
        ConfigError: If the configuration fails validation.
        SourceError: If the source cannot be read.
        MarkupError: If the document is malformed.
        EncodingError: If the document cannot be decoded or a write fails.

    Examples:
        with open("engnet.xml", "rb") as source:
            convert_stream(source, sys.stdout)
    """
    config = config or UsfxConfig()
    validate_config(config)
    debug = debug if config.debug_output else None

    ctx = ParserContext()
    events = iter_events(source, buffer_size=config.buffer_size, trim_text=config.trim_text)
    for fragment in convert_events(events, debug, ctx):
        try:
            sink.write(fragment)
        except (OSError, UnicodeError) as error:
            raise EncodingError(f"Error writing output: {error}") from error
    return ctx.records


def convert_text(content: str | bytes, config: UsfxConfig | None = None) -> str:
    """Convert an in-memory USFX document and return the TSV text.

    `str` content is encoded as UTF-8 before parsing, so it must not declare a
    different encoding.

    Args:
        content: USFX document.
        config: Conversion settings. Defaults to a new `UsfxConfig`.

    Returns:
        str: TSV output, one line per verse.

    Raises:
        ConfigError: If the configuration fails validation.
        MarkupError: If the document is malformed.
        EncodingError: If the document cannot be decoded.

    Examples:
        convert_text('<usfx><v bcv="GEN.1.1"/>In the beginning<ve/></usfx>')
        # "GEN\\t1\\t1\\tIn the beginning\\n"
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    sink = io.StringIO()
    convert_stream(io.BytesIO(content), sink, config)
    return sink.getvalue()


def convert_file(
    filepath: Path,
    sink: TextIO,
    config: UsfxConfig | None = None,
    debug: Callable[[str], None] | None = None,
) -> int:
    """Convert a USFX file, streaming TSV records to `sink`.

    Args:
        filepath: Path to the USFX document.
        sink: Text stream receiving the TSV output.
        config: Conversion settings; defaults to a new `UsfxConfig`.
        debug: Callback for diagnostics, used only when `config.debug_output`
            is enabled.

    Returns:
        int: Number of records written.

    Raises:
        ConfigError: If the configuration fails validation.
        SourceError: If the file cannot be opened or read.
        MarkupError: If the document is malformed.
        EncodingError: If the document cannot be decoded or a write fails.

    Examples:
        records = convert_file(Path("engnet.xml"), sys.stdout, config)
    """
    config = config or UsfxConfig()
    validate_config(config)

    with safe_open(filepath) as source:
        return convert_stream(source, sink, config, debug)

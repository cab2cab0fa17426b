"""Streaming USFX tokenizer built on lxml's feed parser interface."""

from __future__ import annotations

from collections.abc import Iterator
from typing import BinaryIO

from lxml import etree

from .constants import DEFAULT_BUFFER_SIZE
from .exceptions import EncodingError, MarkupError, SourceError
from .models import Event, EventKind

_ENCODING_ERROR_CODES = frozenset(
    {
        etree.ErrorTypes.ERR_INVALID_CHAR,
        etree.ErrorTypes.ERR_INVALID_ENCODING,
        etree.ErrorTypes.ERR_UNKNOWN_ENCODING,
        etree.ErrorTypes.ERR_UNSUPPORTED_ENCODING,
    }
)


def _local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element name."""
    return tag.rpartition("}")[2]


class _EventCollector:
    """Parser target that turns lxml callbacks into `Event` objects.

    Character data is coalesced until the next tag. A start tag is held back
    until the next event arrives so that an element without content can be
    reported as a single `EventKind.EMPTY` event.
    """

    def __init__(self, events: list[Event], trim_text: bool):
        self._events = events
        self._trim_text = trim_text
        self._text: list[str] = []
        self._pending: Event | None = None

    def start(self, tag, attrib, nsmap=None):
        self._flush_text()
        self._flush_pending()
        attributes = {_local_name(key): value for key, value in attrib.items()}
        self._pending = Event(EventKind.START, name=_local_name(tag), attributes=attributes)

    def end(self, tag):
        self._flush_text()
        name = _local_name(tag)
        pending = self._pending
        if pending is not None and pending.name == name:
            self._pending = None
            self._events.append(
                Event(EventKind.EMPTY, name=name, attributes=pending.attributes)
            )
            return
        self._flush_pending()
        self._events.append(Event(EventKind.END, name=name))

    def data(self, data):
        self._text.append(data)

    def close(self):
        self._flush_text()
        self._flush_pending()

    def _flush_pending(self) -> None:
        if self._pending is not None:
            self._events.append(self._pending)
            self._pending = None

    def _flush_text(self) -> None:
        if not self._text:
            return
        text = "".join(self._text)
        self._text.clear()
        if self._trim_text:
            text = text.strip()
        if not text:
            return
        self._flush_pending()
        self._events.append(Event(EventKind.TEXT, text=text))


def _translate_syntax_error(error: etree.XMLSyntaxError) -> Exception:
    line, column = getattr(error, "position", (None, None))
    line, column = line or None, column or None
    message = error.msg or str(error)
    if error.code in _ENCODING_ERROR_CODES:
        return EncodingError(f"Line {line}: {message}" if line else message)
    return MarkupError(message, line=line, column=column)


def iter_events(
    source: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE, trim_text: bool = True
) -> Iterator[Event]:
    """Yield tokenizer events from a binary USFX stream.

    The source is read in `buffer_size` chunks; the events produced by a chunk
    are handed out before the next chunk is read, so memory stays bounded by
    the largest single event. The last event is always `EventKind.EOF`.

    Args:
        source: Binary stream positioned at the start of the document.
        buffer_size: Number of bytes read per chunk.
        trim_text: Strip text payloads and drop whitespace-only payloads.

    Yields:
        Event: Start, end, empty, text, and finally EOF events.

    Raises:
        SourceError: If reading from `source` fails.
        MarkupError: If the document is not well-formed XML.
        EncodingError: If the document bytes cannot be decoded.

    Examples:
        with open("engnet.xml", "rb") as source:
            for event in iter_events(source, buffer_size=65536):
                ...
    """
    events: list[Event] = []
    parser = etree.XMLParser(
        target=_EventCollector(events, trim_text),
        resolve_entities=False,
        no_network=True,
    )

    while True:
        try:
            chunk = source.read(buffer_size)
        except OSError as error:
            raise SourceError(f"Error reading source: {error}") from error

        try:
            if chunk:
                parser.feed(chunk)
            else:
                parser.close()
        except etree.XMLSyntaxError as error:
            raise _translate_syntax_error(error) from error

        yield from events
        events.clear()

        if not chunk:
            break

    yield Event(EventKind.EOF)

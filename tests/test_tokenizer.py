import io

import pytest
from lxml import etree

from usfx_tsv.exceptions import EncodingError, MarkupError, SourceError
from usfx_tsv.models import Event, EventKind
from usfx_tsv.tokenizer import _translate_syntax_error, iter_events


def _events(document: str, **kwargs) -> list[Event]:
    return list(iter_events(io.BytesIO(document.encode("utf-8")), **kwargs))


def test_self_closing_elements_become_empty_events():
    events = _events('<usfx><v bcv="GEN.1.1"/>In the beginning<ve/></usfx>')

    assert events == [
        Event(EventKind.START, name="usfx"),
        Event(EventKind.EMPTY, name="v", attributes={"bcv": "GEN.1.1"}),
        Event(EventKind.TEXT, text="In the beginning"),
        Event(EventKind.EMPTY, name="ve"),
        Event(EventKind.END, name="usfx"),
        Event(EventKind.EOF),
    ]


def test_paired_elements_with_content_are_start_and_end():
    events = _events("<usfx><w>In</w></usfx>")

    assert [event.kind for event in events] == [
        EventKind.START,
        EventKind.START,
        EventKind.TEXT,
        EventKind.END,
        EventKind.END,
        EventKind.EOF,
    ]
    assert events[1].name == "w"
    assert events[3].name == "w"


def test_whitespace_only_text_is_dropped_when_trimming():
    events = _events("<usfx>\n  <w> In </w>\n</usfx>")

    texts = [event.text for event in events if event.kind is EventKind.TEXT]
    assert texts == ["In"]


def test_whitespace_is_kept_without_trimming():
    events = _events("<usfx>\n<w> In </w></usfx>", trim_text=False)

    texts = [event.text for event in events if event.kind is EventKind.TEXT]
    assert texts == ["\n", " In "]


def test_element_with_only_whitespace_is_empty_when_trimming():
    events = _events("<usfx><ve> </ve></usfx>")

    assert Event(EventKind.EMPTY, name="ve") in events


def test_entities_are_unescaped_and_coalesced():
    events = _events("<usfx><w>Cain&apos;s &amp; Abel&#8217;s</w></usfx>")

    texts = [event.text for event in events if event.kind is EventKind.TEXT]
    assert texts == ["Cain's & Abel’s"]


def test_comments_and_processing_instructions_are_skipped():
    events = _events("<usfx><!-- note --><?render x?><w>a<!-- c -->b</w></usfx>")

    texts = [event.text for event in events if event.kind is EventKind.TEXT]
    assert texts == ["ab"]


def test_namespaces_are_stripped_from_names():
    events = _events('<usfx xmlns="urn:usfx"><v xmlns:u="urn:u" u:bcv="GEN.1.1"/></usfx>')

    assert events[1] == Event(EventKind.EMPTY, name="v", attributes={"bcv": "GEN.1.1"})


@pytest.mark.parametrize("buffer_size", [4, 5, 13, 64, 8192])
def test_chunk_size_does_not_change_events(buffer_size: int):
    document = '<usfx><p><v bcv="GEN.1.1"/><w>In</w> <w>the</w> beginning<ve/></p></usfx>'

    assert _events(document, buffer_size=buffer_size) == _events(document)


def test_malformed_markup_raises_markup_error():
    with pytest.raises(MarkupError):
        _events("<usfx><w>In</v></usfx>")


def test_truncated_document_raises_markup_error():
    with pytest.raises(MarkupError):
        _events('<usfx><v bcv="GEN.1.1"/>In the')


def test_empty_document_raises_markup_error():
    with pytest.raises(MarkupError):
        _events("")


def test_read_failure_raises_source_error():
    class BrokenSource(io.RawIOBase):
        def read(self, size=-1):
            raise OSError("device not ready")

    with pytest.raises(SourceError, match="device not ready"):
        list(iter_events(BrokenSource()))


def test_encoding_error_codes_map_to_encoding_error():
    error = etree.XMLSyntaxError(
        "Input is not proper UTF-8", etree.ErrorTypes.ERR_INVALID_CHAR, 3, 5
    )

    assert isinstance(_translate_syntax_error(error), EncodingError)


def test_other_syntax_errors_map_to_markup_error_with_position():
    error = etree.XMLSyntaxError(
        "Opening and ending tag mismatch", etree.ErrorTypes.ERR_TAG_NAME_MISMATCH, 3, 5
    )

    translated = _translate_syntax_error(error)

    assert isinstance(translated, MarkupError)
    assert translated.line == 3
    assert translated.column == 5
    assert str(translated).startswith("Line 3, column 5:")

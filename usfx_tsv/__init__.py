"""
usfx-tsv: USFX scripture to tab-separated verse records.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    usfx-tsv engnet_usfx.xml -o engnet.tsv

Library Usage:
    from pathlib import Path
    from usfx_tsv import convert_text

    tsv = convert_text(Path("engnet_usfx.xml").read_bytes())
    for line in tsv.splitlines():
        book, chapter, verse, text = line.split("\\t", 3)
"""

from .config import ConfigError, UsfxConfig
from .converter import convert_events, convert_file, convert_stream, convert_text
from .emission import decide_fragment
from .exceptions import ConversionError, EncodingError, MarkupError, SourceError
from .interpreter import apply_event
from .models import Event, EventKind, ParserContext, ParserState, VerseReference
from .reference import parse_reference
from .tokenizer import iter_events

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert_text",
    "convert_stream",
    "convert_file",
    "convert_events",
    "iter_events",
    "apply_event",
    "decide_fragment",
    "parse_reference",
    # Data models
    "Event",
    "EventKind",
    "ParserContext",
    "ParserState",
    "VerseReference",
    "UsfxConfig",
    # Exceptions
    "ConfigError",
    "ConversionError",
    "EncodingError",
    "MarkupError",
    "SourceError",
    # Version
    "__version__",
]

"""
Order-preserving JSON documents with embedded application types.

Parses brace-delimited JSON text into an ordered Document with a single-pass
structural scanner and renders Documents back to compact or pretty text.
Application objects registered with a TypeRegistry are written as JSON
objects tagged with a ``"-x"`` type identifier and rebuilt on parse.
"""

import logging
from collections.abc import Mapping
from typing import IO
from typing import Any

from sakura._config import EncodeConfig
from sakura._config import ParseConfig
from sakura._document import DISCRIMINATOR_KEY
from sakura._document import Document
from sakura._document import JsonValue
from sakura._errors import MalformedJsonError
from sakura._escaping import escape
from sakura._escaping import is_escaped
from sakura._escaping import unescape
from sakura._profiling import ScanStats
from sakura._profiling import clear_scan_stats
from sakura._profiling import get_scan_stats
from sakura._profiling import set_profiling
from sakura._profiling import timed_parse
from sakura._scalar import parse_scalar
from sakura._scanner import StructuralScanner
from sakura._writer import DocumentWriter
from sakura.registry import TypeHandler
from sakura.registry import TypeRegistry

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

_WHITESPACE = " \t\n\r"


def _parse_document(text: str, config: ParseConfig) -> Document:
    """
    Validates the outer braces and hands the object span to the scanner.

    Surrounding whitespace is ignored; everything else must sit between one
    opening and one closing brace.
    """
    if text.startswith("\ufeff"):
        raise MalformedJsonError(
            "JSON input should not contain BOM (Byte Order Mark)", text, 0
        )

    start = len(text) - len(text.lstrip(_WHITESPACE))
    end = len(text.rstrip(_WHITESPACE))
    if start >= end or text[start] != "{":
        raise MalformedJsonError("Expecting '{'", text, min(start, end))
    if end - start < 2 or text[end - 1] != "}":
        raise MalformedJsonError("Expecting '}'", text, end)

    with timed_parse(len(text)):
        try:
            return StructuralScanner(text, config).scan_document(start, end)
        except RecursionError:
            raise MalformedJsonError(
                "Maximum nesting depth exceeded", text, start
            ) from None


def parse(text: str, **kwargs: Any) -> Document:
    """
    Parses JSON object text into a Document.

    Accepts the ParseConfig options as keywords (``registry``). Raises
    MalformedJsonError for any grammar violation; no partial result is
    returned.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON object must be str, not {type(text).__name__}"
        )

    config = ParseConfig(**kwargs)
    return _parse_document(text, config)


def stringify(
    document: Mapping[Any, Any],
    pretty: bool = False,
    indent: int = 0,
    **kwargs: Any,
) -> str:
    """
    Renders a Document (or any mapping) as JSON text.

    Compact output carries no whitespace; pretty output puts every member on
    its own line, indented by ``indent`` spaces per nesting level.
    """
    config = EncodeConfig(pretty=pretty, indent=indent, **kwargs)
    return DocumentWriter(config).render(document)


def pretty_string(
    document: Mapping[Any, Any], indent: int = 2, **kwargs: Any
) -> str:
    """Renders a Document as indented, multi-line JSON text."""
    return stringify(document, pretty=True, indent=indent, **kwargs)


def load(fp: IO[str], **kwargs: Any) -> Document:
    """
    Parses a Document from a file-like object.

    The whole stream is read before parsing starts.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return parse(fp.read(), **kwargs)


def dump(document: Mapping[Any, Any], fp: IO[str], **kwargs: Any) -> None:
    """
    Writes a Document to a file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(stringify(document, **kwargs))


__all__ = [
    "DISCRIMINATOR_KEY",
    "Document",
    "EncodeConfig",
    "JsonValue",
    "MalformedJsonError",
    "ParseConfig",
    "ScanStats",
    "TypeHandler",
    "TypeRegistry",
    "clear_scan_stats",
    "dump",
    "escape",
    "get_scan_stats",
    "is_escaped",
    "load",
    "parse",
    "parse_scalar",
    "pretty_string",
    "set_profiling",
    "stringify",
    "unescape",
]

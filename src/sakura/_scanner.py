"""
Single-pass structural parser.

StructuralScanner walks an object or array span of the input one character at
a time, tracking quoting and nesting depth with a handful of counters. Bare
tokens are handed to parse_scalar(); nested objects and arrays are captured by
position while their depth is counted and then parsed by a recursive call on
the same text, bounded by the captured positions.
"""

import logging
import re
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from sakura import _profiling
from sakura._config import ParseConfig
from sakura._document import DISCRIMINATOR_KEY
from sakura._document import Document
from sakura._document import JsonValue
from sakura._document import Position
from sakura._errors import MalformedJsonError
from sakura._escaping import is_escaped
from sakura._escaping import unescape
from sakura._scalar import parse_scalar

logger = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\n\r")

# "key": prefix in front of a nested object or array
_KEY_PATTERN = re.compile(r'"((?:[^"\\]|\\.)*)":', re.DOTALL)
# "key":value member flushed at a comma or at the end of an object
_MEMBER_PATTERN = re.compile(r'"((?:[^"\\]|\\.)*)":(.+)', re.DOTALL)

_CLOSING = {"{": "}", "[": "]"}

# Returned while a captured nested value is still open
_INCOMPLETE = object()


@dataclass
class ScanState:
    """
    Mutable state for scanning one object or array span.

    Maps one-to-one onto the per-character decisions made by the scanner.
    """

    in_quotes: bool = False
    quote_start: Position = -1
    # Nested value being captured; -1 when none is open
    capture_start: Position = -1
    object_depth: int = 0
    array_depth: int = 0
    buffer: list[str] = field(default_factory=list)
    token_start: Position = -1
    pending_key: str | None = None
    split_token: bool = False
    awaiting_separator: bool = False
    after_comma: bool = False
    # Nesting depth of the span; the top-level object is 1
    depth: int = 1

    @property
    def capturing(self) -> bool:
        return self.capture_start >= 0

    def append(self, char: str, pos: Position) -> None:
        if not self.buffer:
            self.token_start = pos
        self.buffer.append(char)
        self.after_comma = False

    def take_token(self) -> str:
        token = "".join(self.buffer)
        self.buffer.clear()
        self.split_token = False
        return token


class StructuralScanner:
    """
    Turns brace-delimited JSON text into Documents.

    One scanner serves a whole parse; scan_document() and scan_array() call
    back into each other for nested values.
    """

    def __init__(self, text: str, config: ParseConfig) -> None:
        self.text = text
        self.config = config

    def _error(self, msg: str, pos: Position) -> MalformedJsonError:
        return MalformedJsonError(msg, self.text, pos)

    def _is_blank(self, start: Position, end: Position) -> bool:
        """True when nothing but whitespace sits between the delimiters."""
        return all(c in _WHITESPACE for c in self.text[start + 1 : end - 1])

    def scan_document(
        self, start: Position, end: Position, depth: int = 1
    ) -> Document:
        """Parses the object spanning text[start:end], braces included."""
        _profiling.record_span("{", depth)
        document = Document()
        if self._is_blank(start, end):
            return document

        state = ScanState(depth=depth)
        for pos in range(start + 1, end - 1):
            char = self.text[pos]
            if state.in_quotes:
                self._scan_quoted(state, char, pos)
            elif state.capturing:
                value = self._scan_captured(state, char, pos)
                if value is not _INCOMPLETE:
                    key = state.pending_key or ""
                    document[key] = value
                    state.pending_key = None
            else:
                self._scan_object_char(state, document, char, pos)

        self._finish(state, end - 1)
        if state.buffer:
            self._flush_member(state, document)
        return document

    def scan_array(
        self, start: Position, end: Position, depth: int = 1
    ) -> list[JsonValue]:
        """Parses the array spanning text[start:end], brackets included."""
        _profiling.record_span("[", depth)
        items: list[JsonValue] = []
        if self._is_blank(start, end):
            return items

        state = ScanState(depth=depth)
        for pos in range(start + 1, end - 1):
            char = self.text[pos]
            if state.in_quotes:
                self._scan_quoted(state, char, pos)
            elif state.capturing:
                value = self._scan_captured(state, char, pos)
                if value is not _INCOMPLETE:
                    items.append(value)
            else:
                self._scan_array_char(state, items, char, pos)

        self._finish(state, end - 1)
        if state.buffer:
            self._flush_element(state, items)
        return items

    def _scan_quoted(self, state: ScanState, char: str, pos: Position) -> None:
        if not state.capturing:
            state.append(char, pos)
        if char == '"' and not is_escaped(pos, self.text):
            state.in_quotes = False

    def _open_quote(self, state: ScanState, pos: Position) -> None:
        state.in_quotes = True
        state.quote_start = pos

    def _scan_captured(
        self, state: ScanState, char: str, pos: Position
    ) -> JsonValue | object:
        """
        Advances through a nested value; returns it once its close is found.

        Returns the _INCOMPLETE sentinel while the value is still open.
        """
        if char == '"':
            self._open_quote(state, pos)
        elif char == "{":
            state.object_depth += 1
        elif char == "[":
            state.array_depth += 1
        elif char == "}":
            state.object_depth -= 1
        elif char == "]":
            state.array_depth -= 1
        else:
            return _INCOMPLETE

        if state.object_depth < 0 or state.array_depth < 0:
            raise self._error(f"Unexpected '{char}'", pos)
        if state.object_depth or state.array_depth:
            return _INCOMPLETE

        start = state.capture_start
        opener = self.text[start]
        if char != _CLOSING[opener]:
            raise self._error(
                f"Mismatched '{char}' closing '{opener}' opened at {start}",
                pos,
            )

        state.capture_start = -1
        state.awaiting_separator = True
        if opener == "{":
            document = self.scan_document(start, pos + 1, state.depth + 1)
            return self._resolve_typed(document, start)
        return self.scan_array(start, pos + 1, state.depth + 1)

    def _begin_capture(
        self, state: ScanState, char: str, pos: Position
    ) -> None:
        state.capture_start = pos
        if char == "{":
            state.object_depth = 1
        else:
            state.array_depth = 1

    def _check_separator(
        self, state: ScanState, char: str, pos: Position
    ) -> None:
        if state.awaiting_separator:
            raise self._error(f"Expecting ',' delimiter, found '{char}'", pos)

    def _mark_gap(self, state: ScanState) -> None:
        # Whitespace after a bare token character ends that token
        if state.buffer and state.buffer[-1] not in '":':
            state.split_token = True

    def _append_bare(self, state: ScanState, char: str, pos: Position) -> None:
        if state.split_token:
            raise self._error(
                f"Unexpected whitespace before '{char}' inside a value", pos
            )
        if char == '"':
            self._open_quote(state, pos)
        state.append(char, pos)

    def _scan_object_char(
        self, state: ScanState, document: Document, char: str, pos: Position
    ) -> None:
        if char in _WHITESPACE:
            self._mark_gap(state)
            return

        if char == ",":
            if state.awaiting_separator:
                state.awaiting_separator = False
            elif not state.buffer:
                raise self._error(
                    "Expecting property name enclosed in double quotes", pos
                )
            else:
                self._flush_member(state, document)
            state.after_comma = True
            return

        self._check_separator(state, char, pos)

        if char in "{[":
            token = state.take_token()
            match = _KEY_PATTERN.fullmatch(token)
            if match is None:
                raise self._error(
                    f"Expecting '\"key\":' before '{char}', found {token!r}",
                    pos,
                )
            state.pending_key = self._decode_key(match[1], state.token_start)
            state.after_comma = False
            self._begin_capture(state, char, pos)
        elif char == "]":
            raise self._error("Unexpected ']' outside of an array", pos)
        elif char == "}":
            raise self._error("Unexpected '}'", pos)
        else:
            self._append_bare(state, char, pos)

    def _scan_array_char(
        self,
        state: ScanState,
        items: list[JsonValue],
        char: str,
        pos: Position,
    ) -> None:
        if char in _WHITESPACE:
            self._mark_gap(state)
            return

        if char == ",":
            if state.awaiting_separator:
                state.awaiting_separator = False
            elif not state.buffer:
                raise self._error("Expecting value", pos)
            else:
                self._flush_element(state, items)
            state.after_comma = True
            return

        self._check_separator(state, char, pos)

        if char == ":":
            raise self._error("Unexpected ':' inside an array", pos)
        elif char in "{[":
            if state.buffer:
                raise self._error(
                    f"Expecting ',' delimiter before '{char}'", pos
                )
            state.after_comma = False
            self._begin_capture(state, char, pos)
        elif char in "]}":
            raise self._error(f"Unexpected '{char}'", pos)
        else:
            self._append_bare(state, char, pos)

    def _finish(self, state: ScanState, close_pos: Position) -> None:
        """Rejects spans ending inside a string or nested value, or on a comma."""
        if state.in_quotes:
            raise self._error(
                "Unterminated string starting at", state.quote_start
            )
        if state.capturing:
            opener = self.text[state.capture_start]
            kind = "object" if opener == "{" else "array"
            raise self._error(
                f"Unterminated {kind} starting at", state.capture_start
            )
        if state.after_comma and not state.buffer:
            raise self._error("Illegal trailing comma", close_pos)

    def _decode_key(self, raw: str, pos: Position) -> str:
        try:
            return unescape(raw)
        except MalformedJsonError as e:
            raise self._error(e.msg, pos) from e

    def _parse_token(self, token: str, pos: Position) -> JsonValue:
        try:
            value = parse_scalar(token)
        except MalformedJsonError as e:
            raise self._error(e.msg, pos) from e
        _profiling.record_scalar()
        return value

    def _flush_member(self, state: ScanState, document: Document) -> None:
        pos = state.token_start
        token = state.take_token()
        match = _MEMBER_PATTERN.fullmatch(token)
        if match is None:
            raise self._error(f"Malformed member: {token}", pos)
        key = self._decode_key(match[1], pos)
        document[key] = self._parse_token(match[2], pos)

    def _flush_element(self, state: ScanState, items: list[JsonValue]) -> None:
        pos = state.token_start
        items.append(self._parse_token(state.take_token(), pos))

    def _resolve_typed(self, document: Document, pos: Position) -> Any:
        """Swaps a discriminator-tagged Document for its registered instance."""
        registry = self.config.registry
        if registry is None or DISCRIMINATOR_KEY not in document:
            return document

        identifier = document[DISCRIMINATOR_KEY]
        if not isinstance(identifier, str):
            return document

        handler = registry.lookup(identifier)
        if handler is None:
            logger.debug(
                "No type registered for %r; keeping plain object", identifier
            )
            return document

        fields = Document(
            (key, value)
            for key, value in document.items()
            if key != DISCRIMINATOR_KEY
        )
        try:
            instance = registry.deserialize(handler, fields)
        except (TypeError, ValueError, KeyError) as e:
            raise self._error(
                f"Cannot reconstruct {identifier!r}: {e}", pos
            ) from e
        _profiling.record_typed()
        return instance


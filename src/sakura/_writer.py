"""
Rendering of Documents back to JSON text.

DocumentWriter produces either compact text or pretty text with one member
per line. Indentation is a running counter on the writer, raised when an
object or array is entered and lowered when it is left.
"""

import math
from collections.abc import Mapping
from typing import Any

from sakura import _profiling
from sakura._config import EncodeConfig
from sakura._document import DISCRIMINATOR_KEY
from sakura._document import Document
from sakura._escaping import escape
from sakura.registry import TypeRegistry


def _encode_string(s: str) -> str:
    return '"' + escape(s) + '"'


def _encode_float(n: float) -> str:
    """Natural decimal text; non-finite values use the NaN/Infinity literals."""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    return repr(n)


class DocumentWriter:
    """Renders mappings, sequences and scalars following one EncodeConfig."""

    def __init__(self, config: EncodeConfig) -> None:
        self.config = config
        self._current_indent = 0

    def render(self, document: Mapping[Any, Any]) -> str:
        """Renders a top-level mapping."""
        if not isinstance(document, Mapping):
            msg = f"expected a mapping, not {type(document).__name__}"
            raise TypeError(msg)

        self._current_indent = 0
        text = self._encode_mapping(document)
        _profiling.record_render(len(text))
        return text

    def _newline(self) -> str:
        return "\n" + " " * self._current_indent

    def _encode_value(self, obj: Any) -> str:  # noqa: PLR0911
        if obj is None:
            return "null"
        elif obj is True:
            return "true"
        elif obj is False:
            return "false"
        elif isinstance(obj, str):
            return _encode_string(obj)
        elif isinstance(obj, int):
            return str(obj)
        elif isinstance(obj, float):
            return _encode_float(obj)

        registry = self.config.registry
        if registry is not None and registry.handler_for(obj) is not None:
            return self._encode_typed(obj, registry)

        if isinstance(obj, Mapping):
            return self._encode_mapping(obj)
        elif isinstance(obj, list | tuple):
            return self._encode_sequence(obj)
        # Anything outside the value model is written as its text
        return _encode_string(str(obj))

    def _encode_typed(self, obj: Any, registry: TypeRegistry) -> str:
        tagged = Document({DISCRIMINATOR_KEY: registry.identifier_for(obj)})
        tagged.update(registry.serialize(obj))
        return self._encode_mapping(tagged)

    def _encode_mapping(self, mapping: Mapping[Any, Any]) -> str:
        if not mapping:
            return "{}"

        pretty = self.config.pretty
        key_separator = ": " if pretty else ":"

        self._current_indent += self.config.indent
        members = []
        for key, value in mapping.items():
            members.append(
                _encode_string(str(key))
                + key_separator
                + self._encode_value(value)
            )

        if not pretty:
            self._current_indent -= self.config.indent
            return "{" + ",".join(members) + "}"

        inner = self._newline()
        self._current_indent -= self.config.indent
        return "{" + inner + ("," + inner).join(members) + self._newline() + "}"

    def _encode_sequence(self, items: list[Any] | tuple[Any, ...]) -> str:
        if not items:
            return "[]"

        self._current_indent += self.config.indent
        encoded = [self._encode_value(item) for item in items]

        if not self.config.pretty:
            self._current_indent -= self.config.indent
            return "[" + ",".join(encoded) + "]"

        inner = self._newline()
        self._current_indent -= self.config.indent
        return "[" + inner + ("," + inner).join(encoded) + self._newline() + "]"

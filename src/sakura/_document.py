"""
Value model shared by the parser and the serializer.

A Document is the ordered key/value mapping a JSON object decodes to. Values
are plain Python objects drawn from a closed set of variants, plus instances
of application types reconstructed through a TypeRegistry.
"""

from collections import OrderedDict
from typing import Any

# Reserved key tagging an embedded application object with its type identifier
DISCRIMINATOR_KEY = "-x"

type Position = int


class Document(OrderedDict[str, "JsonValue"]):
    """
    Ordered JSON object.

    Equality with another Document is order-sensitive; equality with a plain
    dict compares contents only. ``str()`` renders compact JSON text.
    """

    def __str__(self) -> str:
        from sakura._config import EncodeConfig
        from sakura._writer import DocumentWriter

        return DocumentWriter(EncodeConfig()).render(self)

    def to_pretty_string(self, indent: int = 2) -> str:
        """Renders the document across indented lines."""
        from sakura._config import EncodeConfig
        from sakura._writer import DocumentWriter

        return DocumentWriter(EncodeConfig(pretty=True, indent=indent)).render(
            self
        )


# Recursive value variants; Any covers registered application instances
type JsonValue = (
    str | int | float | bool | None | Document | list[JsonValue] | Any
)

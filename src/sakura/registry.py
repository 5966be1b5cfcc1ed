"""
Registry of application types that can be embedded in JSON documents.

A registered instance is written as a JSON object whose ``"-x"`` key holds the
type identifier; when such an object is parsed with the same registry, the
identifier selects the handler that rebuilds the instance.

Lookups read an immutable snapshot and never block. Registration replaces the
snapshot under a lock, so it may run while other threads are parsing, although
registering everything at startup is the expected pattern.
"""

import dataclasses
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from typing import TypeVar

from sakura._document import Document

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

ToDocument = Callable[[Any], Document]
FromDocument = Callable[[Document], Any]


@dataclass(frozen=True)
class TypeHandler:
    """Converters for one registered application type."""

    identifier: str
    cls: type
    to_document: ToDocument
    from_document: FromDocument


def _default_identifier(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _dataclass_converters(cls: type) -> tuple[ToDocument, FromDocument]:
    names = [f.name for f in dataclasses.fields(cls) if f.init]

    def to_document(value: Any) -> Document:
        return Document((name, getattr(value, name)) for name in names)

    def from_document(document: Document) -> Any:
        return cls(**document)

    return to_document, from_document


class TypeRegistry:
    """
    Maps type identifiers to the handlers that (de)serialize them.

    Pass an instance to ``sakura.parse`` and ``sakura.stringify``; there is no
    process-wide default.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_identifier: MappingProxyType[str, TypeHandler] = (
            MappingProxyType({})
        )
        self._by_class: MappingProxyType[type, TypeHandler] = (
            MappingProxyType({})
        )

    def register(
        self,
        cls: type,
        identifier: str | None = None,
        *,
        to_document: ToDocument | None = None,
        from_document: FromDocument | None = None,
    ) -> TypeHandler:
        """
        Registers cls under identifier (default ``module.QualName``).

        Dataclasses get field-based converters when none are supplied; any
        other class must provide both.
        """
        if not isinstance(cls, type):
            raise TypeError("cls must be a class")
        if identifier is None:
            identifier = _default_identifier(cls)
        if not isinstance(identifier, str) or not identifier:
            raise TypeError("identifier must be a non-empty string")

        if to_document is None or from_document is None:
            if not dataclasses.is_dataclass(cls):
                raise TypeError(
                    f"{cls.__qualname__} is not a dataclass; "
                    "to_document and from_document are required"
                )
            default_to, default_from = _dataclass_converters(cls)
            to_document = to_document or default_to
            from_document = from_document or default_from

        handler = TypeHandler(identifier, cls, to_document, from_document)

        with self._lock:
            by_identifier = dict(self._by_identifier)
            by_class = dict(self._by_class)

            previous = by_identifier.get(identifier)
            if previous is not None:
                logger.warning(
                    "Type identifier %r re-registered: %s replaces %s",
                    identifier,
                    cls.__qualname__,
                    previous.cls.__qualname__,
                )
                by_class.pop(previous.cls, None)

            by_identifier[identifier] = handler
            by_class[cls] = handler
            self._by_identifier = MappingProxyType(by_identifier)
            self._by_class = MappingProxyType(by_class)

        logger.debug("Registered %s as %r", cls.__qualname__, identifier)
        return handler

    def type(
        self,
        identifier: str | None = None,
        *,
        to_document: ToDocument | None = None,
        from_document: FromDocument | None = None,
    ) -> Callable[[T], T]:
        """Class decorator form of register()."""

        def decorator(cls: T) -> T:
            self.register(
                cls,
                identifier,
                to_document=to_document,
                from_document=from_document,
            )
            return cls

        return decorator

    def unregister(self, identifier: str) -> None:
        """Removes the handler registered under identifier."""
        with self._lock:
            by_identifier = dict(self._by_identifier)
            handler = by_identifier.pop(identifier)
            by_class = dict(self._by_class)
            by_class.pop(handler.cls, None)
            self._by_identifier = MappingProxyType(by_identifier)
            self._by_class = MappingProxyType(by_class)

    def lookup(self, identifier: str) -> TypeHandler | None:
        """Returns the handler for identifier, or None when unknown."""
        return self._by_identifier.get(identifier)

    def handler_for(self, value: Any) -> TypeHandler | None:
        """Returns the handler for value's class or its nearest registered base."""
        by_class = self._by_class
        if not by_class:
            return None
        for klass in type(value).__mro__:
            handler = by_class.get(klass)
            if handler is not None:
                return handler
        return None

    def identifier_for(self, value: Any) -> str:
        """Returns the identifier value is written under."""
        return self._require_handler(value).identifier

    def serialize(self, value: Any) -> Document:
        """Converts a registered instance to its backing Document."""
        return self._require_handler(value).to_document(value)

    def deserialize(self, handler: TypeHandler, document: Document) -> Any:
        """Rebuilds an instance from its backing Document (discriminator removed)."""
        return handler.from_document(document)

    def _require_handler(self, value: Any) -> TypeHandler:
        handler = self.handler_for(value)
        if handler is None:
            raise TypeError(
                f"Object of type {type(value).__name__} is not registered"
            )
        return handler

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._by_identifier

    def __len__(self) -> int:
        return len(self._by_identifier)

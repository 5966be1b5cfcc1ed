"""Immutable option sets for parsing and rendering."""

from dataclasses import dataclass

from sakura.registry import TypeRegistry


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    The registry, when given, turns discriminator-tagged objects back into
    application instances.
    """

    registry: TypeRegistry | None = None

    def __post_init__(self) -> None:
        if self.registry is not None and not isinstance(
            self.registry, TypeRegistry
        ):
            raise TypeError("registry must be a TypeRegistry")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures rendering behavior with immutable settings.

    ``indent`` is the number of spaces added per nesting level and only
    applies when ``pretty`` is set.
    """

    pretty: bool = False
    indent: int = 0
    registry: TypeRegistry | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.pretty, bool):
            raise TypeError("pretty must be a boolean")
        if not isinstance(self.indent, int) or isinstance(self.indent, bool):
            raise TypeError("indent must be an integer")
        if self.indent < 0:
            raise ValueError("indent must be non-negative")
        if self.registry is not None and not isinstance(
            self.registry, TypeRegistry
        ):
            raise TypeError("registry must be a TypeRegistry")

"""Error type raised for every malformed-input condition."""

from sakura._document import Position


class MalformedJsonError(ValueError):
    """
    Signals that JSON text could not be turned into a Document.

    Carries the offending document, the absolute position of the violation
    and the derived line/column numbers so callers can point at the problem.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def __reduce__(self) -> tuple[type, tuple[str, str, Position]]:
        return self.__class__, (self.msg, self.doc, self.pos)

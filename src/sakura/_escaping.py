"""
String escaping shared by the scanner, the scalar parser and the writer.

escape() produces JSON string-body text, unescape() is its inverse and
is_escaped() answers whether a character in a buffer is backslash-escaped.
"""

from sakura._errors import MalformedJsonError

_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "/": "\\/",
}

_SHORT_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)


def _needs_unicode_escape(code_point: int) -> bool:
    """Control characters and the general punctuation block go out as \\uXXXX."""
    return (
        code_point <= 0x1F
        or 0x7F <= code_point <= 0x9F
        or 0x2000 <= code_point <= 0x20FF
    )


def escape(text: str) -> str:
    """Escapes text so it can be placed between JSON string quotes."""
    result = []
    for char in text:
        short = _SHORT_ESCAPES.get(char)
        if short is not None:
            result.append(short)
        elif _needs_unicode_escape(ord(char)):
            result.append(f"\\u{ord(char):04X}")
        else:
            result.append(char)
    return "".join(result)


def _read_code_unit(text: str, i: int) -> int:
    """Reads the four hex digits of a \\uXXXX sequence starting at i."""
    hex_digits = text[i + 2 : i + 6]
    if len(hex_digits) < 4:
        raise MalformedJsonError(
            "Incomplete unicode escape sequence", text, i
        )
    if not all(c in _HEX_DIGITS for c in hex_digits):
        raise MalformedJsonError(
            f"Invalid unicode escape sequence: \\u{hex_digits}", text, i
        )
    return int(hex_digits, 16)


def _process_escape_sequence(text: str, i: int) -> tuple[str, int]:
    """Decodes the escape sequence at i, returning the character and new position."""
    next_char = text[i + 1]

    if next_char in _SHORT_UNESCAPES:
        return _SHORT_UNESCAPES[next_char], i + 2
    elif next_char == "u":
        code_unit = _read_code_unit(text, i)
        # Join a UTF-16 surrogate pair into one code point
        if (
            code_unit in _HIGH_SURROGATES
            and len(text) >= i + 12
            and text.startswith("\\u", i + 6)
            and all(c in _HEX_DIGITS for c in text[i + 8 : i + 12])
        ):
            low = int(text[i + 8 : i + 12], 16)
            if low in _LOW_SURROGATES:
                code_point = 0x10000 + ((code_unit - 0xD800) << 10)
                return chr(code_point + (low - 0xDC00)), i + 12
        return chr(code_unit), i + 6
    else:
        raise MalformedJsonError(
            f"Invalid escape sequence: \\{next_char}", text, i
        )


def unescape(text: str) -> str:
    """Decodes JSON escape sequences in a string body (quotes already removed)."""
    if "\\" not in text:
        return text

    result = []
    i = 0
    length = len(text)
    while i < length:
        if text[i] == "\\":
            if i + 1 >= length:
                raise MalformedJsonError(
                    "Unterminated escape sequence", text, i
                )
            char, i = _process_escape_sequence(text, i)
            result.append(char)
        else:
            result.append(text[i])
            i += 1

    return "".join(result)


def is_escaped(position: int, text: str) -> bool:
    """
    Reports whether the character at position is backslash-escaped.

    True when it is preceded by an odd number of consecutive backslashes.
    """
    if position <= 0 or position >= len(text):
        return False

    backslashes = 0
    i = position - 1
    while i >= 0 and text[i] == "\\":
        backslashes += 1
        i -= 1
    return backslashes % 2 == 1

"""
Typed conversion of bare value tokens.

A token is tried as a string, an integer, a floating value and finally a
literal; the first interpretation that succeeds wins.
"""

import re

from sakura._document import JsonValue
from sakura._errors import MalformedJsonError
from sakura._escaping import unescape

_INT_PATTERN = re.compile(r"[-+]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"
    r"|[-+]?(?:NaN|Infinity)"
)
_STRING_BODY_PATTERN = re.compile(r'(?:[^"\\]|\\.)*', re.DOTALL)

_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

_LITERALS: dict[str, JsonValue] = {"TRUE": True, "FALSE": False, "NULL": None}


def _parse_string_token(token: str) -> str:
    if len(token) < 2 or not token.endswith('"'):
        raise MalformedJsonError(f"Unterminated string: {token}", token, 0)

    body = token[1:-1]
    if not _STRING_BODY_PATTERN.fullmatch(body):
        raise MalformedJsonError(
            f"Unescaped quote inside string: {token}", token, 0
        )
    return unescape(body)


def _parse_int_token(token: str) -> int | None:
    if not _INT_PATTERN.fullmatch(token):
        return None

    number = int(token)
    if _INT64_MIN <= number <= _INT64_MAX:
        return number
    # Wider than 64 bits: left to the floating parse
    return None


def _parse_float_token(token: str) -> float | None:
    if not _FLOAT_PATTERN.fullmatch(token):
        return None
    return float(token)


def parse_scalar(token: str) -> JsonValue:
    """
    Converts a trimmed token into a string, number, boolean or None.

    Quoted tokens are always strings, so ``"5"`` stays text while ``5`` is an
    integer. Unquoted tokens that are neither numbers nor one of the
    case-insensitive literals true/false/null are rejected.
    """
    if token.startswith('"'):
        return _parse_string_token(token)

    integer = _parse_int_token(token)
    if integer is not None:
        return integer

    floating = _parse_float_token(token)
    if floating is not None:
        return floating

    upper = token.upper()
    if upper in _LITERALS:
        return _LITERALS[upper]

    raise MalformedJsonError(f"Malformed value: {token!r}", token, 0)

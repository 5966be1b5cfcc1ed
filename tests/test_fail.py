"""
Malformed input tests.

Validates that every grammar violation raises MalformedJsonError with a
diagnostic message and an absolute position into the original text.
"""

import pickle

import pytest

import sakura
from sakura import MalformedJsonError

from .conftest import JsonTestCase


def test_malformed_documents(malformed_documents: list[JsonTestCase]) -> None:
    """
    Validates each malformed fixture is rejected with position information.
    """
    for case in malformed_documents:
        with pytest.raises(MalformedJsonError) as exc_info:
            sakura.parse(case.input_data)

        err = exc_info.value
        assert err.pos >= 0, case.description
        assert err.lineno >= 1, case.description
        assert err.colno >= 1, case.description


def test_malformed_is_value_error() -> None:
    """
    Validates MalformedJsonError can be caught as ValueError.
    """
    with pytest.raises(ValueError):
        sakura.parse("[]")


@pytest.mark.parametrize(
    "input_data,expected_msg,expected_pos",
    [
        ('{"a": [1:2]}', "Unexpected ':' inside an array", 8),
        ('{"a":1,}', "Illegal trailing comma", 7),
        ('{"a":"x}', "Unterminated string starting at", 5),
        ('{"a":{"b":1}', "Unterminated object starting at", 5),
        ('{"a":[1,2}', "Unterminated array starting at", 5),
        ('{"a":1]}', "Unexpected ']' outside of an array", 6),
        ('{"a":[{]}}', "Mismatched '}' closing '[' opened at 5", 8),
        ('{"a":[1,,2]}', "Expecting value", 8),
        ('{,"a":1}', "Expecting property name enclosed in double quotes", 1),
        ('{"a":[]"b":1}', "Expecting ',' delimiter, found '\"'", 7),
        ("", "Expecting '{'", 0),
        ('["x"]', "Expecting '{'", 0),
        ('{"a":1', "Expecting '}'", 6),
    ],
)
def test_error_messages_and_positions(
    input_data: str, expected_msg: str, expected_pos: int
) -> None:
    """
    Validates precise messages and positions for structural violations.
    """
    with pytest.raises(MalformedJsonError) as exc_info:
        sakura.parse(input_data)

    err = exc_info.value
    assert err.msg == expected_msg
    assert err.pos == expected_pos
    assert err.doc == input_data


@pytest.mark.parametrize(
    "input_data,fragment",
    [
        ('{"a": alert()}', "alert()"),
        ('{"a": 0x14}', "0x14"),
        ('{"a": [1, truth]}', "truth"),
    ],
)
def test_malformed_token_is_named(input_data: str, fragment: str) -> None:
    """
    Validates scalar failures name the offending token.
    """
    with pytest.raises(MalformedJsonError) as exc_info:
        sakura.parse(input_data)

    assert fragment in exc_info.value.msg


def test_nested_error_uses_absolute_position() -> None:
    """
    Validates violations inside nested values point into the full text.
    """
    text = '{"outer": {"inner": [1, 2, {"deep": ::}]}}'
    with pytest.raises(MalformedJsonError) as exc_info:
        sakura.parse(text)

    assert exc_info.value.pos == text.index('"deep"')


def test_excessive_nesting_is_malformed() -> None:
    """
    Validates nesting too deep to scan is reported as malformed input.
    """
    deep = '{"a":' + "[" * 1000 + "]" * 1000 + "}"
    with pytest.raises(MalformedJsonError) as exc_info:
        sakura.parse(deep)

    assert exc_info.value.msg == "Maximum nesting depth exceeded"
    assert exc_info.value.pos == 0

    shallow = '{"a":' + "[" * 50 + "]" * 50 + "}"
    assert sakura.stringify(sakura.parse(shallow)) == shallow


def test_line_column_calculation() -> None:
    """
    Validates line and column numbers for multi-line input.
    """
    with pytest.raises(MalformedJsonError) as exc_info:
        sakura.parse('{\n  "a": ]\n}')

    err = exc_info.value
    assert err.pos == 9
    assert err.lineno == 2
    assert err.colno == 8
    assert "at line 2, column 8" in str(err)


def test_utf8_bom_rejection() -> None:
    """
    Validates rejection of a leading byte order mark.
    """
    bom_json = '{"a": 1}'.encode("utf-8-sig").decode("utf-8")

    with pytest.raises(MalformedJsonError) as exc_info:
        sakura.parse(bom_json)
    assert "BOM" in str(exc_info.value)


def test_error_survives_pickling() -> None:
    """
    Validates errors keep their fields across pickling.
    """
    err = MalformedJsonError("Expecting value", '{"a":}', 5)
    clone = pickle.loads(pickle.dumps(err))

    assert (clone.msg, clone.doc, clone.pos) == (err.msg, err.doc, err.pos)
    assert str(clone) == str(err)


@pytest.mark.parametrize("bad_pos", [-1, 1.5])
def test_error_rejects_bad_position(bad_pos: object) -> None:
    """
    Validates the error type guards its own arguments.
    """
    with pytest.raises(ValueError):
        MalformedJsonError("msg", "", bad_pos)  # type: ignore[arg-type]

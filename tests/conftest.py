"""
Pytest configuration and shared fixtures for sakura tests.

Provides immutable test data fixtures and the application types used by the
typed round-trip tests.
"""

from dataclasses import dataclass
from typing import Any

import pytest

from sakura import TypeRegistry


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point
    label: str = ""


@pytest.fixture
def point_registry() -> TypeRegistry:
    """Registry with Point as ``pkg.Point`` and Segment as ``pkg.Segment``."""
    registry = TypeRegistry()
    registry.register(Point, "pkg.Point")
    registry.register(Segment, "pkg.Segment")
    return registry


@pytest.fixture
def malformed_documents() -> list[JsonTestCase]:
    """
    Provides texts that must be rejected with MalformedJsonError.

    Adapted from the json.org JSON_checker failure suite to object-rooted
    documents, plus violations specific to the structural scanner.
    """
    fail_docs = [
        ("string payload", '"A JSON payload should be an object"'),
        ("array payload", '["an array is not a document"]'),
        ("unquoted key", '{unquoted_key: "keys must be quoted"}'),
        ("extra comma", '{"Extra comma": true,}'),
        (
            "value after close",
            '{"Extra value after close": true} "misplaced quoted value"',
        ),
        ("expression", '{"Illegal expression": 1 + 2}'),
        ("invocation", '{"Illegal invocation": alert()}'),
        ("hex number", '{"Numbers cannot be hex": 0x14}'),
        ("missing colon", '{"Missing colon" null}'),
        ("double colon", '{"Double colon":: null}'),
        ("comma for colon", '{"Comma instead of colon", null}'),
        ("colon in array", '{"a": ["Colon instead of comma": false]}'),
        ("bad literal", '{"a": ["Bad value", truth]}'),
        ("single quotes", "{'single quote': 1}"),
        ("unclosed document", '{"Comma instead if closing brace": true,'),
        ("mismatched close", '{"a": ["mismatch"}}'),
        ("crossed nesting", '{"a":[{]}}'),
        ("extra close brace", '{"a": 1}}'),
        ("extra close bracket", '{"a": [1, 2]]}'),
        ("unterminated string", '{"a": "unterminated}'),
        ("unterminated object", '{"a": {"b": 1}'),
        ("leading comma", '{,"a": 1}'),
        ("double comma", '{"a": 1,,"b": 2}'),
        ("array trailing comma", '{"a": [1,]}'),
        ("array leading comma", '{"a": [,1]}'),
        ("split number", '{"a": 1 2}'),
        ("split literal", '{"a": tru e}'),
        ("bad escape", '{"a": "bad \\x escape"}'),
        ("missing separator", '{"a": {}"b": 1}'),
        ("key without colon", '{"key" [1]}'),
        ("stray bracket", '{"a": 1]}'),
        ("embedded quote", '{"a": "x""y"}'),
        ("empty input", ""),
        ("lone brace", "{"),
        ("whitespace only", "   "),
    ]

    return [
        JsonTestCase(description=name, input_data=doc, should_fail=True)
        for name, doc in fail_docs
    ]


@pytest.fixture
def well_formed_documents() -> list[JsonTestCase]:
    """
    Provides object-rooted texts with their expected decoded value.
    """
    return [
        JsonTestCase("empty object", "{}", False, {}),
        JsonTestCase("padded empty object", "  {  }\n", False, {}),
        JsonTestCase("empty array member", '{"a":[]}', False, {"a": []}),
        JsonTestCase("empty object member", '{"a":{}}', False, {"a": {}}),
        JsonTestCase(
            "spaced member", ' { "key" : "value" } ', False, {"key": "value"}
        ),
        JsonTestCase(
            "scalar kinds",
            '{"s":"x","i":-7,"f":2.5,"t":true,"F":false,"n":null}',
            False,
            {"s": "x", "i": -7, "f": 2.5, "t": True, "F": False, "n": None},
        ),
        JsonTestCase(
            "mixed array",
            '{"mixed":[1,"two",3.5,true,null,{"k":"v"},[]]}',
            False,
            {"mixed": [1, "two", 3.5, True, None, {"k": "v"}, []]},
        ),
        JsonTestCase(
            "deep nesting",
            '{"a":{"b":{"c":[1,[2,3],{"d":null}]}}}',
            False,
            {"a": {"b": {"c": [1, [2, 3], {"d": None}]}}},
        ),
        JsonTestCase(
            "structural characters in strings",
            '{"s":"{[,:]}","t":"a \\"quoted\\" word"}',
            False,
            {"s": "{[,:]}", "t": 'a "quoted" word'},
        ),
        JsonTestCase(
            "escaped backslash before quote",
            '{"p":"C:\\\\","q":1}',
            False,
            {"p": "C:\\", "q": 1},
        ),
        JsonTestCase(
            "multi-line layout",
            '{\n\t"a": [\n\t\t1,\n\t\t2\n\t],\r\n\t"b": {\n\t\t"c": "d e"\n\t}\n}',
            False,
            {"a": [1, 2], "b": {"c": "d e"}},
        ),
        JsonTestCase(
            "nested arrays",
            '{"grid":[[1,2],[3,[4,[]]]]}',
            False,
            {"grid": [[1, 2], [3, [4, []]]]},
        ),
        JsonTestCase(
            "unicode escapes",
            '{"u":"\\u00e9\\ud83d\\ude00","k\\u00e9y":1}',
            False,
            {"u": "\u00e9\U0001f600", "k\u00e9y": 1},
        ),
    ]

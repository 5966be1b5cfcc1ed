"""
Round-trip tests.

Validates that rendered text parses back to an equal Document in every
layout, and that parsed text renders back to the same compact text.
"""

import pytest

import sakura
from sakura import Document

DOCUMENTS = [
    Document(),
    Document([("a", [])]),
    Document([("name", "a"), ("tags", ["x", "y"]), ("meta", {"v": 1})]),
    Document(
        [
            ("text", 'quote " slash / back \\ tab \t line \n'),
            ("unicode", "caf\u00e9 \u2028 \U0001f600"),
            ("nums", [0, -1, 2**40, 1.5, -2.25e-10]),
            ("lits", [True, False, None]),
        ]
    ),
    Document(
        [
            ("grid", [[1, 2], [3, [4, []]], []]),
            ("objs", [{"k": "v"}, {}, {"n": {"m": None}}]),
            ("structural", "{[,:]}"),
        ]
    ),
    Document([("zeta", 1), ("alpha", 2), ("", "empty key")]),
]

LAYOUTS = [(False, 0), (True, 0), (True, 2), (True, 4)]


@pytest.mark.parametrize("pretty,indent", LAYOUTS)
@pytest.mark.parametrize("document", DOCUMENTS)
def test_render_then_parse(document: Document, pretty: bool, indent: int) -> None:
    """
    Validates parse(stringify(doc)) equals doc with order preserved.
    """
    text = sakura.stringify(document, pretty=pretty, indent=indent)
    parsed = sakura.parse(text)

    assert parsed == Document(document)
    assert list(parsed) == list(document)


@pytest.mark.parametrize(
    "text",
    [
        "{}",
        '{"a":[]}',
        '{"name":"a","tags":["x","y"],"meta":{"v":1}}',
        '{"n":[1,-2,3.5,1e-07],"b":[true,false,null]}',
        '{"s":"\\"\\\\\\/\\n\\u0001"}',
    ],
)
def test_parse_then_render(text: str) -> None:
    """
    Validates canonical compact text survives a parse and render unchanged.
    """
    assert sakura.stringify(sakura.parse(text)) == text

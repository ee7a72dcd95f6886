from __future__ import annotations

import pytest

from richtext_tags.models import DecodedChar
from richtext_tags.parser import decode
from richtext_tags.serializer import encode, format_tags, normalize
from richtext_tags.tags import TagKind

B = TagKind.BOLD
I = TagKind.ITALIC
U = TagKind.UNDERLINE
S = TagKind.STRIKETHROUGH


def _sequence(*items: tuple[str, TagKind]) -> tuple[DecodedChar, ...]:
    return tuple(DecodedChar(char, pos, tags) for pos, (char, tags) in enumerate(items))


def test_format_tags_uses_priority_order():
    assert format_tags(S | U | I | B) == "<b><i><u><s>"
    assert format_tags(S | B, closing=True) == "</b></s>"
    assert format_tags(TagKind.NONE) == ""


def test_encode_empty_sequence():
    assert encode(()) == ""
    assert encode([]) == ""


def test_encode_plain_text():
    assert encode(decode("plain text")) == "plain text"


def test_encode_multi_tag_overlap_matches_input():
    markup = "<b><i>ab</i>c</b>"
    assert encode(decode(markup)) == markup


def test_encode_hello_world():
    assert encode(decode("Hello <b>World</b>!")) == "Hello <b>World</b>!"


def test_encode_closes_tags_left_open():
    assert encode(_sequence(("a", B | U))) == "<b><u>a</b></u>"


def test_encode_reorders_tags_canonically():
    assert encode(decode("<i><b>x</b></i>")) == "<b><i>x</b></i>"
    assert encode(decode("<s><u>x</u></s>")) == "<u><s>x</u></s>"


def test_encode_opens_before_closing_at_a_boundary():
    sequence = _sequence(("a", B), ("b", I))

    assert encode(sequence) == "<b>a<i></b>b</i>"
    assert [char.tags for char in decode(encode(sequence))] == [B, I]


def test_encode_merges_redundant_spans():
    assert normalize("<b>a</b><b>b</b>") == "<b>ab</b>"


def test_encode_drops_unknown_tags_and_unclosed_opens():
    assert normalize("a<x>b</x>c") == "abc"
    assert normalize("<u>open") == "<u>open</u>"


def test_encode_keeps_unterminated_bracket_as_text():
    assert normalize("<b>1</b> < 2") == "<b>1</b> < 2"


def test_encode_accepts_any_iterable():
    chars = (char for char in decode("<s>x</s>"))
    assert encode(chars) == "<s>x</s>"


@pytest.mark.parametrize(
    "markup",
    [
        "",
        "abc",
        "<b>a</b>",
        "<b><i>ab</i>c</b>",
        "x<u>y<s>z</u>w</s>",
    ],
)
def test_normalize_is_a_fixed_point(markup: str):
    once = normalize(markup)
    assert normalize(once) == once


def test_normalize_missing_input():
    assert normalize(None) == ""

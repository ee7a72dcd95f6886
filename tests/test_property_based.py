from __future__ import annotations

from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from richtext_tags.models import DecodedChar
from richtext_tags.parser import decode, strip_tags
from richtext_tags.serializer import encode, normalize
from richtext_tags.tags import TAG_ORDER, TagKind
from richtext_tags.toggle import common_tags, toggle_range

# Markup-heavy alphabet so tags, stray delimiters and text all show up often.
markup_strategy = st.lists(
    st.sampled_from(
        [
            "a", "b", " ", "<", ">", "/",
            "<b>", "</b>", "<i>", "</i>", "<u>", "</u>", "<s>", "</s>", "<x>",
        ]
    ),
    max_size=40,
).map("".join)

tag_set_strategy = st.integers(min_value=0, max_value=15).map(TagKind)
kind_strategy = st.sampled_from(TAG_ORDER)


@st.composite
def sequences(draw):
    items = draw(
        st.lists(
            st.tuples(st.sampled_from("ab >/\n"), tag_set_strategy),
            max_size=30,
        )
    )
    return tuple(DecodedChar(char, pos, tags) for pos, (char, tags) in enumerate(items))


@given(markup_strategy)
def test_decode_positions_are_contiguous(markup: str):
    decoded = decode(markup)
    assert [char.position for char in decoded] == list(range(len(decoded)))


@given(st.text(max_size=200))
def test_decode_never_raises_and_is_deterministic(markup: str):
    assert decode(markup) == decode(markup)


@given(markup_strategy)
def test_normalize_is_idempotent(markup: str):
    assume("<" not in strip_tags(markup))

    once = normalize(markup)
    assert normalize(once) == once


@given(markup_strategy)
def test_normalize_preserves_plain_text(markup: str):
    assume("<" not in strip_tags(markup))
    assert strip_tags(normalize(markup)) == strip_tags(markup)


@given(sequences())
def test_encode_then_decode_keeps_tag_sets(sequence):
    redecoded = decode(encode(sequence))

    assert [char.tags for char in redecoded] == [char.tags for char in sequence]
    assert [char.character for char in redecoded] == [char.character for char in sequence]


@given(sequences())
def test_encode_output_is_balanced(sequence):
    markup = encode(sequence)

    for name in ("b", "i", "u", "s"):
        assert markup.count(f"<{name}>") == markup.count(f"</{name}>")


@given(markup_strategy, st.integers(0, 30), st.integers(0, 30), kind_strategy)
def test_toggle_twice_restores_uniform_selection(markup, start, end, kind):
    assume("<" not in strip_tags(markup))
    canonical = normalize(markup)
    selected = [char for char in decode(canonical) if start <= char.position < end]
    all_on = bool(selected) and (common_tags(decode(canonical), start, end) & kind) == kind
    all_off = all(not char.has_tag(kind) for char in selected)
    assume(all_on or all_off)

    assert toggle_range(toggle_range(canonical, start, end, kind), start, end, kind) == canonical


@settings(suppress_health_check=[HealthCheck.filter_too_much])
@given(markup_strategy, st.integers(0, 30), st.integers(0, 30), kind_strategy)
def test_toggle_makes_selection_uniform(markup, start, end, kind):
    assume("<" not in strip_tags(markup))
    toggled = decode(toggle_range(markup, start, end, kind))
    selected = [char for char in toggled if start <= char.position < end]
    assume(selected)

    flags = {char.has_tag(kind) for char in selected}
    assert len(flags) == 1


@given(markup_strategy, st.integers(0, 30), st.integers(0, 30), kind_strategy)
def test_toggle_leaves_unselected_characters_alone(markup, start, end, kind):
    assume("<" not in strip_tags(markup))
    before = decode(markup)
    after = decode(toggle_range(markup, start, end, kind))

    assert len(after) == len(before)
    for old, new in zip(before, after):
        if not start <= old.position < end:
            assert new.tags == old.tags
        assert new.tags & ~kind == old.tags & ~kind

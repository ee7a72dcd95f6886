"""Range toggling of style tags."""

from __future__ import annotations

from .models import DecodedSequence, ToggleAction, ToggleResult
from .parser import decode
from .serializer import encode
from .tags import TagKind, add_tag, remove_tag


def select_range(sequence: DecodedSequence, start: int, end: int) -> DecodedSequence:
    """Return the characters whose position lies in ``[start, end)``.

    Ranges reaching past the end of the sequence are clipped; an empty or
    reversed range selects nothing.
    """
    if start < 0 or start >= end:
        return ()
    return tuple(char for char in sequence if start <= char.position < end)


def common_tags(sequence: DecodedSequence, start: int, end: int) -> TagKind:
    """Return the tags carried by every character in ``[start, end)``.

    Args:
        sequence: Decoded characters.
        start: First selected position (inclusive).
        end: Position after the last selected character (exclusive).

    Returns:
        TagKind: Intersection of the selected tag sets; ``TagKind.NONE`` when
            the selection is empty.

    Examples:
        common_tags(decode("<b>a<i>b</i></b>"), 0, 2)  # TagKind.BOLD
    """
    selected = select_range(sequence, start, end)
    if not selected:
        return TagKind.NONE

    shared = selected[0].tags
    for char in selected[1:]:
        shared &= char.tags
    return shared


def toggle_sequence(
    sequence: DecodedSequence, start: int, end: int, kind: TagKind
) -> ToggleResult:
    """Toggle `kind` over the characters in ``[start, end)``.

    When every selected character already carries `kind` it is removed from
    all of them; otherwise it is added to those lacking it. A combined `kind`
    is handled as one unit.

    Args:
        sequence: Decoded characters; not modified.
        start: First selected position (inclusive).
        end: Position after the last selected character (exclusive).
        kind: Tag kind to toggle.

    Returns:
        ToggleResult: The new full sequence and the action taken. The action
            is ``UNCHANGED`` (and the input sequence is returned as is) when
            the selection is empty or `kind` is ``TagKind.NONE``.

    Examples:
        result = toggle_sequence(decode("abc"), 0, 2, TagKind.BOLD)
        result.action  # ToggleAction.ADDED
    """
    selected = select_range(sequence, start, end)
    if not selected or kind == TagKind.NONE:
        return ToggleResult(sequence=sequence, action=ToggleAction.UNCHANGED)

    all_have_tag = (common_tags(sequence, start, end) & kind) == kind
    action = ToggleAction.REMOVED if all_have_tag else ToggleAction.ADDED

    toggled = []
    for char in sequence:
        if start <= char.position < end:
            if all_have_tag:
                char = char.with_tags(remove_tag(char.tags, kind))
            else:
                char = char.with_tags(add_tag(char.tags, kind))
        toggled.append(char)

    return ToggleResult(sequence=tuple(toggled), action=action)


def toggle_range(markup: str | None, start: int, end: int, kind: TagKind) -> str:
    """Toggle a tag over a selection of decoded text and re-render the markup.

    Offsets address the decoded (tag-stripped) text, not the raw markup.

    Args:
        markup: Current markup text.
        start: First selected position (inclusive).
        end: Position after the last selected character (exclusive).
        kind: Tag kind to toggle.

    Returns:
        str: Canonical markup with the tag toggled, or `markup` unchanged when
            it is empty or the selection covers no characters.

    Examples:
        toggle_range("Hello <b>World</b>!", 6, 11, TagKind.BOLD)  # "Hello World!"
        toggle_range("abc", 1, 1, TagKind.BOLD)  # "abc"
    """
    if not markup:
        return markup or ""

    result = toggle_sequence(decode(markup), start, end, kind)
    if not result.changed:
        return markup
    return encode(result.sequence)

"""Canonical markup rendering for decoded sequences."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import CLOSE_TAG_PREFIX, TAG_END, TAG_START
from .models import DecodedChar
from .parser import decode
from .tags import TagKind, iter_tags, tag_name


def format_tags(tags: TagKind, closing: bool = False) -> str:
    """Render the tags in `tags` as markup, in priority order.

    Args:
        tags: Tag set to render.
        closing: Render closing tags (``</b>``) instead of opening ones.

    Returns:
        str: Concatenated tags; empty for ``TagKind.NONE``.

    Examples:
        format_tags(TagKind.ITALIC | TagKind.BOLD)  # "<b><i>"
        format_tags(TagKind.UNDERLINE, closing=True)  # "</u>"
    """
    prefix = TAG_START + CLOSE_TAG_PREFIX if closing else TAG_START
    return "".join(f"{prefix}{tag_name(kind)}{TAG_END}" for kind in iter_tags(tags))


def encode(sequence: Iterable[DecodedChar]) -> str:
    """Render a decoded sequence as canonical markup.

    At every character boundary, tags that become active are opened and tags
    that stop being active are closed, each group in priority order (bold,
    italic, underline, strikethrough). Whatever is still open after the last
    character is closed, so the output never has unmatched tags. The original
    order in which tags were written is not preserved.

    Args:
        sequence: Decoded characters in reading order.

    Returns:
        str: Canonical markup; empty for an empty sequence.

    Examples:
        encode(decode("<i><b>x</b></i>"))  # "<b><i>x</b></i>"
    """
    parts: list[str] = []
    current = TagKind.NONE

    for char in sequence:
        to_open = char.tags & ~current
        if to_open:
            parts.append(format_tags(to_open))

        to_close = current & ~char.tags
        if to_close:
            parts.append(format_tags(to_close, closing=True))

        parts.append(char.character)
        current = char.tags

    if current:
        parts.append(format_tags(current, closing=True))

    return "".join(parts)


def normalize(markup: str | None) -> str:
    """Rewrite markup in canonical form.

    A second pass is a no-op unless the decoded text holds a literal ``<``:
    closing tags emitted after it give it a ``>`` to pair with.
    """
    return encode(decode(markup))

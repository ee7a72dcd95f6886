"""Style tag vocabulary and tag-set bit operations."""

from __future__ import annotations

from collections.abc import Iterator
from enum import IntFlag

from .exceptions import UnknownTagError


class TagKind(IntFlag):
    """Style tags a character can carry, combinable with ``|``.

    A tag set is any combination of members; ``NONE`` is the empty set.
    """

    NONE = 0
    BOLD = 1
    ITALIC = 2
    UNDERLINE = 4
    STRIKETHROUGH = 8


# Priority order used whenever several tags open or close at the same point.
TAG_ORDER = (TagKind.BOLD, TagKind.ITALIC, TagKind.UNDERLINE, TagKind.STRIKETHROUGH)

TAG_NAMES = {
    TagKind.BOLD: "b",
    TagKind.ITALIC: "i",
    TagKind.UNDERLINE: "u",
    TagKind.STRIKETHROUGH: "s",
}

_KINDS_BY_NAME = {name: kind for kind, name in TAG_NAMES.items()}


def tag_name(kind: TagKind) -> str:
    """Return the canonical markup name for a single tag kind.

    Args:
        kind: One of the four style kinds.

    Returns:
        str: ``"b"``, ``"i"``, ``"u"`` or ``"s"``; an empty string for
            ``NONE`` or a combined value.

    Examples:
        tag_name(TagKind.ITALIC)  # "i"
    """
    return TAG_NAMES.get(kind, "")


def tag_kind(name: str) -> TagKind | None:
    """Look up a tag kind by its exact markup name.

    Args:
        name: Tag name as written between the angle brackets.

    Returns:
        TagKind | None: The matching kind, or None when the name is not part
            of the vocabulary. Matching is case-sensitive.

    Examples:
        tag_kind("u")  # TagKind.UNDERLINE
        tag_kind("B")  # None
    """
    return _KINDS_BY_NAME.get(name)


def require_tag_kind(name: str) -> TagKind:
    """Like `tag_kind`, but raise `UnknownTagError` for unknown names."""
    kind = tag_kind(name)
    if kind is None:
        raise UnknownTagError(name)
    return kind


def add_tag(tags: TagKind, kind: TagKind) -> TagKind:
    return tags | kind


def remove_tag(tags: TagKind, kind: TagKind) -> TagKind:
    return tags & ~kind


def contains_tag(tags: TagKind, kind: TagKind) -> bool:
    return (tags & kind) != 0


def iter_tags(tags: TagKind) -> Iterator[TagKind]:
    """Yield the kinds present in `tags` in priority order."""
    for kind in TAG_ORDER:
        if contains_tag(tags, kind):
            yield kind

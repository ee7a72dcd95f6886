"""Data models for richtext-tags."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto

from .tags import TagKind, contains_tag, iter_tags


@dataclass(frozen=True)
class DecodedChar:
    """One visible character of decoded markup and the tags active on it.

    Attributes:
        character: The literal character.
        position: Zero-based index in the decoded (tag-stripped) stream.
        tags: Tag set active at this character.
    """

    character: str
    position: int
    tags: TagKind = TagKind.NONE

    def has_tag(self, kind: TagKind) -> bool:
        return contains_tag(self.tags, kind)

    def has_any_tag(self) -> bool:
        return self.tags != TagKind.NONE

    def tag_kinds(self) -> list[TagKind]:
        """Return the active kinds in priority order."""
        return list(iter_tags(self.tags))

    def with_tags(self, tags: TagKind) -> DecodedChar:
        """Return a copy of this character carrying `tags` instead."""
        return replace(self, tags=tags)

    def __str__(self) -> str:
        kinds = self.tag_kinds()
        names = ",".join(kind.name for kind in kinds) if kinds else "NONE"
        return f"{self.character!r} pos:{self.position} tags:[{names}]"


# Positions run 0..len-1 in order and match indices in the tuple.
DecodedSequence = tuple[DecodedChar, ...]


@dataclass
class ParserContext:
    """Encapsulate scan state while decoding markup.

    Attributes:
        current_tags: Tags applied to the next literal character.
        tag_stack: Opened tag kinds, innermost last. Only consulted to
            pop a matching close tag; never used to rebuild nesting.
        position: Decoded position the next literal character receives.
    """

    current_tags: TagKind = TagKind.NONE
    tag_stack: list[TagKind] = field(default_factory=list)
    position: int = 0


class ToggleAction(Enum):
    """Outcome of toggling a tag over a selection.

    Attributes:
        ADDED: The tag was applied to every selected character.
        REMOVED: The tag was removed from every selected character.
        UNCHANGED: The selection was empty; nothing was modified.
    """

    ADDED = auto()
    REMOVED = auto()
    UNCHANGED = auto()


@dataclass(frozen=True)
class ToggleResult:
    """Structured result of toggling a tag over a decoded sequence.

    Attributes:
        sequence: The full sequence after the toggle.
        action: What the toggle did to the selected characters.
    """

    sequence: DecodedSequence
    action: ToggleAction

    @property
    def changed(self) -> bool:
        return self.action is not ToggleAction.UNCHANGED

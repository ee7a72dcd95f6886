"""
richtext-tags: bold/italic/underline/strikethrough markup for plain text buffers.

Converts between tag-delimited markup (``<b>hi</b>``) and per-character tag
state, and toggles a tag over a selection of the plain text. This package can
be used both as a CLI tool and as a library.

CLI Usage:
    richtext-tags toggle notes.txt --start 6 --end 11 --tag b

Library Usage:
    from richtext_tags import TagKind, toggle_range

    markup = toggle_range("Hello <b>World</b>!", 6, 11, TagKind.BOLD)
    # "Hello World!"
"""

from .exceptions import MarkupError, UnknownTagError
from .models import DecodedChar, DecodedSequence, ToggleAction, ToggleResult
from .parser import decode, strip_tags
from .serializer import encode, format_tags, normalize
from .tags import (
    TAG_NAMES,
    TAG_ORDER,
    TagKind,
    add_tag,
    contains_tag,
    remove_tag,
    require_tag_kind,
    tag_kind,
    tag_name,
)
from .toggle import common_tags, toggle_range, toggle_sequence

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "decode",
    "encode",
    "normalize",
    "strip_tags",
    "toggle_range",
    "toggle_sequence",
    "common_tags",
    "format_tags",
    # Tag vocabulary
    "TagKind",
    "TAG_NAMES",
    "TAG_ORDER",
    "tag_name",
    "tag_kind",
    "require_tag_kind",
    "add_tag",
    "remove_tag",
    "contains_tag",
    # Data models
    "DecodedChar",
    "DecodedSequence",
    "ToggleAction",
    "ToggleResult",
    # Exceptions
    "MarkupError",
    "UnknownTagError",
    # Version
    "__version__",
]

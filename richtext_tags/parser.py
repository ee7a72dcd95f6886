"""Markup decoding utilities."""

from __future__ import annotations

from pathlib import Path

from .config import ConfigError, RichTextConfig, validate_config
from .constants import CLOSE_TAG_PREFIX, TAG_END, TAG_START
from .exceptions import MarkupFileError
from .filesystem import load_markup_file
from .models import DecodedChar, DecodedSequence, ParserContext
from .tags import add_tag, remove_tag, tag_kind


def _open_tag(ctx: ParserContext, name: str) -> bool:
    """Apply an opening tag to the scan state.

    Args:
        ctx: Parser context to update.
        name: Tag name found between the delimiters.

    Returns:
        bool: True when the name is a known tag and the context was updated.

    Examples:
        _open_tag(ParserContext(), "b")  # True
    """
    kind = tag_kind(name)
    if kind is None:
        return False

    ctx.tag_stack.append(kind)
    ctx.current_tags = add_tag(ctx.current_tags, kind)
    return True


def _close_tag(ctx: ParserContext, name: str) -> bool:
    """Apply a closing tag to the scan state.

    The kind is always removed from the current tag set. The stack is popped
    only when its top matches; an empty stack or a mismatch is left alone.

    Args:
        ctx: Parser context to update.
        name: Tag name after the leading ``/``.

    Returns:
        bool: True when the name is a known tag and the context was updated.

    Examples:
        ctx = ParserContext()
        _open_tag(ctx, "i")
        _close_tag(ctx, "i")  # True, stack is empty again
    """
    kind = tag_kind(name)
    if kind is None:
        return False

    ctx.current_tags = remove_tag(ctx.current_tags, kind)
    if ctx.tag_stack and ctx.tag_stack[-1] == kind:
        ctx.tag_stack.pop()
    return True


def _try_consume_tag(ctx: ParserContext, text: str, pos: int) -> int | None:
    """Consume a ``<...>`` span starting at `pos`.

    Unknown tag names are consumed without changing state.

    Args:
        ctx: Parser context to update.
        text: Markup being decoded.
        pos: Index of a ``<`` character.

    Returns:
        int | None: Index just past the closing ``>``, or None when no ``>``
            follows and the ``<`` must be kept as a literal.

    Examples:
        _try_consume_tag(ParserContext(), "<b>x", 0)  # 3
        _try_consume_tag(ParserContext(), "a < b", 2)  # None
    """
    end = text.find(TAG_END, pos)
    if end == -1:
        return None

    content = text[pos + 1 : end]
    if content.startswith(CLOSE_TAG_PREFIX):
        _close_tag(ctx, content[len(CLOSE_TAG_PREFIX) :])
    else:
        _open_tag(ctx, content)
    return end + 1


def decode(markup: str | None) -> DecodedSequence:
    """Decode tag-delimited markup into per-character tag state.

    Scans left to right, tracking the active tag set. Each literal character
    is recorded with the tags active when it is reached. Malformed markup is
    decoded on a best-effort basis and never raises: an unterminated ``<`` is
    a literal character, unknown tags are dropped, and stray or mismatched
    closing tags only clear their own kind.

    Args:
        markup: Markup to decode. None is treated as empty.

    Returns:
        DecodedSequence: Characters in reading order with positions
            ``0..n-1``.

    Examples:
        decode("a<b>c</b>")  # ('a' NONE, 'c' BOLD)
        decode(None)  # ()
    """
    if not markup:
        return ()

    ctx = ParserContext()
    characters: list[DecodedChar] = []
    i = 0
    # Once a search for ">" fails, no later "<" can be closed either.
    closable = True

    while i < len(markup):
        if closable and markup[i] == TAG_START:
            resume = _try_consume_tag(ctx, markup, i)
            if resume is not None:
                i = resume
                continue
            closable = False

        characters.append(DecodedChar(markup[i], ctx.position, ctx.current_tags))
        ctx.position += 1
        i += 1

    return tuple(characters)


def strip_tags(markup: str | None) -> str:
    """Return the plain-text projection of markup.

    Offsets into this string are the offsets selections are expressed in.

    Examples:
        strip_tags("Hello <b>World</b>!")  # "Hello World!"
    """
    return "".join(char.character for char in decode(markup))


def read_markup(filepath: Path, config: RichTextConfig | None = None) -> str:
    """Read a UTF-8 markup file.

    Args:
        filepath: Path to the file to read.
        config: Configuration providing the size limit; defaults to a new
            `RichTextConfig` when omitted.

    Returns:
        str: The file content.

    Raises:
        MarkupFileError: If configuration is invalid, the file is larger than
            `max_file_size`, or it cannot be read or decoded.

    Examples:
        text = read_markup(Path("notes.txt"))
    """
    config = config or RichTextConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise MarkupFileError(str(error)) from error

    return load_markup_file(filepath, config.max_file_size).markup

"""
Command-line access to richtext-tags.
Toggles style tags over a selection of a markup file, normalizes markup, or
shows its plain text and per-character tag state.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import RichTextConfig, build_config
from .exceptions import MarkupFileError
from .filesystem import MarkupFile, load_markup_file, resolve_markup_path, save_markup_file
from .models import ToggleAction
from .parser import decode, strip_tags
from .serializer import encode, normalize
from .tags import TAG_NAMES, require_tag_kind
from .toggle import toggle_sequence

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def _load_markup(raw_path: str) -> tuple[RichTextConfig, MarkupFile]:
    """Resolve, configure and read a markup file for a command.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file is too large or cannot be read.
    """
    try:
        path = resolve_markup_path(raw_path, Path.cwd().resolve())
        config = build_config(path.parent)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        source = load_markup_file(path, config.max_file_size)
    except MarkupFileError as error:
        raise click.ClickException(str(error)) from error

    return config, source


def _emit(source: MarkupFile, markup: str, in_place: bool) -> None:
    if not in_place:
        click.echo(markup, nl=False)
        return

    try:
        save_markup_file(source, markup, warn=lambda message: click.echo(message, err=True))
    except MarkupFileError as error:
        raise click.ClickException(str(error)) from error
    logger.debug("Rewrote %s", source.path)


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr")
def cli(verbose: bool = False):
    """
    Edit bold, italic, underline and strikethrough tags in markup files.

    Selections are offsets into the plain text (the markup with all tags
    removed), counted in characters.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--start", type=int, required=True, help="First selected character (inclusive)")
@click.option("--end", type=int, required=True, help="End of the selection (exclusive)")
@click.option("--tag", type=click.Choice(list(TAG_NAMES.values())), help="Tag to toggle")
@click.option("--in-place", is_flag=True, help="Rewrite the file instead of printing")
def toggle(filepath: str, start: int, end: int, tag: str | None, in_place: bool):
    """
    Toggle a tag over the characters in [START, END).

    If every selected character already has the tag it is removed; otherwise
    it is added where missing. The whole file is written back in canonical
    form. An empty selection leaves the markup untouched.

    Examples:
        richtext-tags toggle notes.txt --start 6 --end 11 --tag b
    """
    config, source = _load_markup(filepath)
    markup = source.markup
    kind = require_tag_kind(tag or config.default_tag)

    result = toggle_sequence(decode(markup), start, end, kind)
    if result.action is ToggleAction.UNCHANGED:
        if config.warn_on_noop:
            logger.warning(
                "Selection %d-%d of %s contains no characters; nothing to toggle",
                start,
                end,
                source.path.name,
            )
        new_markup = markup
    else:
        logger.debug(
            "%s <%s> over %d-%d", result.action.name.lower(), TAG_NAMES[kind], start, end
        )
        new_markup = encode(result.sequence)

    if in_place and not result.changed:
        return
    _emit(source, new_markup, in_place)


@cli.command("normalize")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--in-place", is_flag=True, help="Rewrite the file instead of printing")
def normalize_command(filepath: str, in_place: bool):
    """Rewrite markup in canonical tag order, dropping unknown tags."""
    _, source = _load_markup(filepath)
    canonical = normalize(source.markup)
    if in_place and canonical == source.markup:
        logger.debug("%s is already canonical", source.path.name)
        return
    _emit(source, canonical, in_place)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def strip(filepath: str):
    """Print the plain text that selection offsets refer to."""
    _, source = _load_markup(filepath)
    click.echo(strip_tags(source.markup), nl=False)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def inspect(filepath: str):
    """Print each decoded character with its position and tags."""
    _, source = _load_markup(filepath)
    for char in decode(source.markup):
        click.echo(str(char))


if __name__ == "__main__":
    cli()

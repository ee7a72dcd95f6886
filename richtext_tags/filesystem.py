"""Reading markup files and rewriting them atomically."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .exceptions import MarkupFileError


def _fingerprint(stat_result: os.stat_result) -> tuple[int, int, int, int]:
    return (
        stat_result.st_ino,
        stat_result.st_dev,
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


@dataclass(frozen=True)
class MarkupFile:
    """Markup loaded from disk, with what is needed to write it back safely.

    Attributes:
        path: Path the markup was read from.
        markup: File content decoded as UTF-8, line endings untouched.
        mode: Permission bits restored on rewrite.
        owner: ``(uid, gid)`` restored on rewrite when permitted.
        fingerprint: Inode, device, size and mtime at load time. A rewrite is
            refused once the file on disk no longer matches.
    """

    path: Path
    markup: str
    mode: int
    owner: tuple[int, int]
    fingerprint: tuple[int, int, int, int]


def resolve_markup_path(raw_path: str, base_dir: Path) -> Path:
    """Resolve a user-supplied markup path inside `base_dir`.

    Args:
        raw_path: Path as given on the command line (absolute or relative).
        base_dir: Resolved working directory that constrains allowed paths.

    Returns:
        Path: Resolved path to an existing regular file.

    Raises:
        ValueError: If the path goes through a symlink, does not exist, lies
            outside `base_dir`, or is not a regular file.

    Examples:
        resolve_markup_path("notes/intro.txt", Path.cwd().resolve())
    """
    path = Path(raw_path).expanduser().absolute()

    for component in (path, *path.parents):
        if component == base_dir:
            break
        if component.is_symlink():
            raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    if not path.exists():
        raise ValueError(f"{path} does not exist.")

    resolved = path.resolve()
    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")
    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    return resolved


def load_markup_file(path: Path, max_file_size: int) -> MarkupFile:
    """Read a UTF-8 markup file, enforcing the size limit while reading.

    The file is opened without following symlinks, and its size and type are
    checked on the open descriptor.

    Args:
        path: File to read.
        max_file_size: Maximum size in bytes.

    Returns:
        MarkupFile: Content plus the metadata used by `save_markup_file`.

    Raises:
        MarkupFileError: If the file cannot be opened, is not a regular file,
            is larger than `max_file_size`, or is not valid UTF-8.

    Examples:
        source = load_markup_file(Path("notes.txt"), 10 * 1024 * 1024)
    """
    try:
        descriptor = os.open(path, os.O_RDONLY | getattr(os, "O_NOFOLLOW", 0))
    except OSError as error:
        raise MarkupFileError(f"Error accessing {path}: {error}") from error

    with os.fdopen(descriptor, "rb") as stream:
        info = os.fstat(stream.fileno())
        if not stat.S_ISREG(info.st_mode):
            raise MarkupFileError(f"{path} is not a regular file.")
        data = b""
        if info.st_size <= max_file_size:
            data = stream.read(max_file_size + 1)

    if info.st_size > max_file_size or len(data) > max_file_size:
        raise MarkupFileError(
            f"{path} exceeds the maximum allowed size of {max_file_size} bytes."
        )

    try:
        markup = data.decode("utf-8")
    except UnicodeDecodeError as error:
        raise MarkupFileError(f"Invalid UTF-8 sequence in {path}: {error}") from error

    return MarkupFile(
        path=Path(path),
        markup=markup,
        mode=stat.S_IMODE(info.st_mode),
        owner=(info.st_uid, info.st_gid),
        fingerprint=_fingerprint(info),
    )


def save_markup_file(
    source: MarkupFile, markup: str, warn: Callable[[str], None] | None = None
) -> None:
    """Replace the content of a previously loaded file with new markup.

    Writes a temporary file next to the original and renames it over the
    original, so readers see either the old or the new markup.

    Args:
        source: The file as loaded; its fingerprint must still match the disk.
        markup: New content, written as UTF-8.
        warn: Optional callback for non-fatal problems (ownership not kept).

    Raises:
        MarkupFileError: If the file changed since it was loaded or the
            replacement cannot be written.

    Examples:
        save_markup_file(source, toggle_range(source.markup, 0, 5, TagKind.BOLD))
    """
    try:
        current = os.stat(source.path, follow_symlinks=False)
    except OSError as error:
        raise MarkupFileError(f"Error accessing {source.path}: {error}") from error
    if _fingerprint(current) != source.fingerprint:
        raise MarkupFileError(f"{source.path} changed during processing; refusing to overwrite.")

    descriptor, temp_name = tempfile.mkstemp(
        dir=source.path.parent, prefix=f".{source.path.name}."
    )
    temp_path = Path(temp_name)
    try:
        with os.fdopen(descriptor, "wb") as stream:
            stream.write(markup.encode("utf-8"))
            stream.flush()
            os.fsync(stream.fileno())
        os.chmod(temp_path, source.mode)
        if hasattr(os, "chown"):
            try:
                os.chown(temp_path, *source.owner)
            except PermissionError:
                if warn is not None:
                    warn(f"Warning: could not keep the owner of {source.path.name}")
        os.replace(temp_path, source.path)
    except OSError as error:
        raise MarkupFileError(f"Could not rewrite {source.path}: {error}") from error
    finally:
        temp_path.unlink(missing_ok=True)

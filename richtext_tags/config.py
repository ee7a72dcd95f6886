"""Configuration loading and management."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .tags import TAG_NAMES

CONFIG_TABLE = "richtext-tags"
DOTFILE_NAME = ".richtext-tags.toml"
MAX_FILE_SIZE_ENV_VAR = "RICHTEXT_TAGS_MAX_FILE_SIZE"


@dataclass
class RichTextConfig:
    """Configuration for the richtext-tags command-line tool.

    Attributes:
        default_tag: Tag name toggled when ``--tag`` is not given.
        max_file_size: Maximum file size in bytes that will be processed.
        warn_on_noop: Whether a toggle that changes nothing is logged as a
            warning.

    Examples:
        RichTextConfig(default_tag="i", warn_on_noop=False)
    """

    default_tag: str = "b"
    max_file_size: int = 10 * 1024 * 1024
    warn_on_noop: bool = True


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`default_tag` must be one of: b, i, u, s")
    """


def load_config(search_path: Path) -> RichTextConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.richtext-tags]`` table from `pyproject.toml` and the
    ``[richtext-tags]`` or ``[tool.richtext-tags]`` table from
    `.richtext-tags.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RichTextConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / DOTFILE_NAME,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RichTextConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> RichTextConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RichTextConfig:
    table_display = ".".join(table_path)

    if raw_config is None or raw_config == {}:
        return RichTextConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return RichTextConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: RichTextConfig) -> None:
    """Validate a `RichTextConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the default tag is not a vocabulary tag, the size limit
            is not a positive integer, or `warn_on_noop` is not a boolean.

    Examples:
        validate_config(RichTextConfig(default_tag="u"))
    """
    if config.default_tag not in TAG_NAMES.values():
        allowed = ", ".join(TAG_NAMES.values())
        raise ConfigError(f"`default_tag` must be one of: {allowed}")

    value = config.max_file_size
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("`max_file_size` must be an integer")
    if value <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")

    if not isinstance(config.warn_on_noop, bool):
        raise ConfigError("`warn_on_noop` must be a boolean")


def apply_overrides(config: RichTextConfig, **overrides: object) -> RichTextConfig:
    """Apply override values to a `RichTextConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RichTextConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RichTextConfig`.

    Examples:
        updated = apply_overrides(config, default_tag="s")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def _environment_overrides() -> dict[str, object]:
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw is None:
        return {}
    try:
        return {"max_file_size": int(raw)}
    except ValueError as error:
        raise ConfigError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}"
        ) from error


def build_config(search_path: Path, **overrides: object) -> RichTextConfig:
    """Load, override, and validate configuration.

    The file configuration is overridden by `RICHTEXT_TAGS_MAX_FILE_SIZE`, which
    is in turn overridden by explicit `overrides`.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), max_file_size=4096)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **_environment_overrides())
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config

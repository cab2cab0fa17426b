"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

TOOL_NAME = "usfx-tsv"
DOTFILE_NAME = ".usfx-tsv.toml"


@dataclass
class UsfxConfig:
    """Configuration for converting USFX documents to TSV.

    Attributes:
        buffer_size: Number of bytes read from the source per chunk. Affects
            performance only.
        trim_text: Strip leading and trailing whitespace from each text
            payload and drop payloads that are whitespace only. When
            disabled, a payload that is exactly one newline becomes the `^`
            marker. A newline embedded in longer text is written as is in
            either mode and splits the verse across lines.
        debug_output: Report diagnostics (skipped references, unknown tags)
            through the debug callback. Never affects the TSV output.

    Examples:
        UsfxConfig(buffer_size=65536, trim_text=False)
    """

    buffer_size: int = 8192
    trim_text: bool = True
    debug_output: bool = False


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`buffer_size` must be a positive integer")
    """


# Files consulted in each directory, in order, with the tables read from them.
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", TOOL_NAME),)),
    (DOTFILE_NAME, ((TOOL_NAME,), ("tool", TOOL_NAME))),
)

# Setting name -> (expected TOML type, description used in errors).
SETTING_TYPES: dict[str, tuple[type, str]] = {
    "buffer_size": (int, "an integer"),
    "trim_text": (bool, "a boolean"),
    "debug_output": (bool, "a boolean"),
}


def load_config(search_path: Path) -> UsfxConfig:
    """Load configuration from the nearest config file.

    Looks in `search_path` and then each of its parents for a ``[tool.usfx-tsv]``
    table in `pyproject.toml`, or a ``[usfx-tsv]`` / ``[tool.usfx-tsv]`` table in
    `.usfx-tsv.toml`. The first table found wins, even when it is empty. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        UsfxConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but is not a mapping, holds an
            unknown key, or holds a value of the wrong type.

    Examples:
        load_config(Path("bibles"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            raw_config, table_path = _read_table(directory / filename, table_paths)
            if table_path is not None:
                return _build_config_from_raw(raw_config, directory / filename, table_path)
    return UsfxConfig()


def _read_table(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[object, tuple[str, ...] | None]:
    if not config_file.is_file():
        return None, None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None, None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            if not isinstance(table, dict) or key not in table:
                break
            table = table[key]
        else:
            return table, table_path
    return None, None


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> UsfxConfig:
    location = f"`[{'.'.join(table_path)}]` in {config_file}"
    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid {location}: expected a table")

    settings = {}
    for key, value in raw_config.items():
        if key not in SETTING_TYPES:
            raise ConfigError(f"Invalid {location}: unknown setting `{key}`")
        expected, description = SETTING_TYPES[key]
        # bool is an int subclass; a flag is not a size.
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"Invalid {location}: `{key}` must be {description}")
        settings[key] = value
    return UsfxConfig(**settings)


def validate_config(config: UsfxConfig) -> None:
    """Validate a `UsfxConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If `buffer_size` is not a positive integer or a flag is
            not a boolean.

    Examples:
        validate_config(UsfxConfig(buffer_size=4096))
    """
    if isinstance(config.buffer_size, bool) or not isinstance(config.buffer_size, int):
        raise ConfigError("`buffer_size` must be an integer")
    if config.buffer_size <= 0:
        raise ConfigError("`buffer_size` must be a positive integer")

    for key in ("trim_text", "debug_output"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")


def apply_overrides(config: UsfxConfig, **overrides: object) -> UsfxConfig:
    """Apply override values to a `UsfxConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None are ignored.

    Returns:
        UsfxConfig: New configuration with the overrides applied, or `config`
        itself when there is nothing to change.

    Raises:
        TypeError: If an override name is not defined on `UsfxConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> UsfxConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        UsfxConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), trim_text=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config

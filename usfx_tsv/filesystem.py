"""Filesystem helpers for usfx-tsv."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from .constants import DEFAULT_BUFFER_SIZE, USFX_EXTENSIONS
from .exceptions import SourceError

BUFFER_SIZE_ENV_VAR = "USFX_TSV_BUFFER_SIZE"


def get_buffer_size(default: int = DEFAULT_BUFFER_SIZE) -> int:
    """Resolve the read-chunk size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Number of bytes to read from the source per chunk.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["USFX_TSV_BUFFER_SIZE"] = "65536"
        size = get_buffer_size(default=8192)
    """
    env_value = os.environ.get(BUFFER_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        buffer_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {BUFFER_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if buffer_size <= 0:
        error_message = f"{BUFFER_SIZE_ENV_VAR} must be a positive integer, got {buffer_size}."
        raise ValueError(error_message)

    return buffer_size


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink."""
    return any(_is_symlink(candidate) for candidate in (path, *path.parents))


def _is_symlink(path: Path) -> bool:
    try:
        return path.is_symlink()
    except OSError:
        return False


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate the path of a USFX document.

    The document is only read, so any directory is accepted, but the path must
    lead to a regular file with a USFX extension without passing through a
    symlink.

    Args:
        raw_path: User-supplied path to a USFX file (absolute or relative).

    Returns:
        Path: Absolute path to the USFX file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, uses an
            unsupported extension, or traverses a symlink.

    Examples:
        normalize_filepath("bibles/engnet_usfx.xml")
        normalize_filepath("~/engwebp.usfx")
    """
    path = Path(raw_path).expanduser()
    if contains_symlink(path):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if resolved.suffix.lower() not in USFX_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not a USFX file.\n"
            f"Supported extensions are: {', '.join(USFX_EXTENSIONS)}"
        )
    return resolved


def safe_open(filepath: Path) -> BinaryIO:
    """Open a USFX document for binary reading.

    Decoding is left to the XML parser, which honours the document's encoding
    declaration.

    Raises:
        SourceError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_open(Path("engnet_usfx.xml")) as handle:
            header = handle.read(64)
    """
    try:
        return open(filepath, "rb")
    except OSError as error:
        raise SourceError(f"Error accessing {filepath}: {error}") from error

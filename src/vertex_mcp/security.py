# SPDX-License-Identifier: MIT
"""Path security helpers for storage access.

Filenames come from tool arguments, so every path is resolved and checked
against its base directory before it is opened.
"""

import pathlib


def check_not_symlink(path: pathlib.Path, description: str) -> None:
    """Reject symbolic links.

    Non-existent paths pass; there is nothing to follow yet.

    Raises:
        ValueError: If ``path`` is a symbolic link
    """
    if path.is_symlink():
        raise ValueError(f"{description} cannot be a symbolic link: {path.name}")


def validate_safe_path(base_path: pathlib.Path, filename: str, allow_create: bool = False) -> pathlib.Path:
    """Resolve ``filename`` inside ``base_path``.

    Args:
        base_path: Directory the file must live in
        filename: User-supplied relative filename
        allow_create: Accept a path that does not exist yet (for writes)

    Returns:
        Resolved absolute path

    Raises:
        ValueError: On path traversal, or a missing file when ``allow_create`` is False
    """
    base = base_path.resolve()
    candidate = (base / filename).resolve()
    try:
        candidate.relative_to(base)
    except ValueError as e:
        raise ValueError(f"Invalid filename: path traversal detected ({filename})") from e

    if not allow_create and not candidate.exists():
        raise ValueError(f"File not found: {filename}")
    return candidate

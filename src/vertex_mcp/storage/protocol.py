# SPDX-License-Identifier: MIT
"""Storage backend protocol for generated media and input images."""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

PathType = Literal["video", "image"]
"""Identifies which base directory a file operation targets."""


@runtime_checkable
class StorageBackend(Protocol):
    """Byte-level file storage keyed by ``(path_type, filename)``.

    Filenames are relative to the base directory of *path_type*;
    implementations reject anything that escapes it.
    """

    async def read(self, path_type: PathType, filename: str) -> bytes:
        """Read entire file contents.

        Raises:
            ValueError: If the file does not exist or path traversal is detected.
        """
        ...

    async def write(self, path_type: PathType, filename: str, data: bytes) -> str:
        """Write entire file contents.

        Returns:
            A display-friendly path or URI for the written file.

        Raises:
            ValueError: On path traversal or a payload over the size limit.
        """
        ...

    async def exists(self, path_type: PathType, filename: str) -> bool: ...

# SPDX-License-Identifier: MIT
"""Local filesystem storage backend.

Writes generated media under ``IMAGE_PATH`` / ``VIDEO_PATH`` (or the
``images/`` and ``videos/`` subdirectories of ``STORAGE_PATH``).
"""

from __future__ import annotations

import pathlib

import aiofiles

from ..config import get_max_file_size_bytes, get_path
from ..security import check_not_symlink, validate_safe_path
from .protocol import PathType


class LocalStorageBackend:
    """Local-disk storage using the configured output directories.

    Args:
        path_overrides: Optional mapping of path_type → Path used in tests to
            redirect I/O into ``tmp_path`` fixtures without touching env vars.
        max_file_size: Largest payload accepted by :meth:`write`, in bytes.
            Defaults to ``MAX_FILE_SIZE_MB``.
    """

    def __init__(
        self,
        path_overrides: dict[str, pathlib.Path] | None = None,
        max_file_size: int | None = None,
    ) -> None:
        self._overrides = path_overrides or {}
        self._max_file_size = max_file_size

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base(self, path_type: PathType) -> pathlib.Path:
        if path_type in self._overrides:
            return self._overrides[path_type]
        return get_path(path_type)

    def _safe(self, path_type: PathType, filename: str, *, allow_create: bool = False) -> pathlib.Path:
        return validate_safe_path(self._base(path_type), filename, allow_create=allow_create)

    def _check_symlink(self, path_type: PathType, filename: str) -> None:
        """Check for symlinks on the unresolved path (before validate_safe_path resolves it)."""
        check_not_symlink(self._base(path_type) / filename, f"{path_type} file")

    @property
    def max_file_size(self) -> int:
        if self._max_file_size is None:
            return get_max_file_size_bytes()
        return self._max_file_size

    # ------------------------------------------------------------------
    # Byte-level I/O
    # ------------------------------------------------------------------

    async def read(self, path_type: PathType, filename: str) -> bytes:
        self._check_symlink(path_type, filename)
        file_path = self._safe(path_type, filename)
        async with aiofiles.open(file_path, "rb") as f:
            return await f.read()

    async def write(self, path_type: PathType, filename: str, data: bytes) -> str:
        if len(data) > self.max_file_size:
            raise ValueError(
                f"{filename} is {len(data) / (1024 * 1024):.1f} MB, "
                f"larger than the {self.max_file_size // (1024 * 1024)} MB limit"
            )
        self._check_symlink(path_type, filename)
        file_path = self._safe(path_type, filename, allow_create=True)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(data)
        return str(file_path)

    async def exists(self, path_type: PathType, filename: str) -> bool:
        try:
            self._check_symlink(path_type, filename)
            base = self._base(path_type).resolve()
            file_path = (base / filename).resolve()
            file_path.relative_to(base)
            return file_path.exists()
        except (ValueError, OSError):
            return False


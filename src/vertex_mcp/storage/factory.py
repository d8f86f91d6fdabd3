# SPDX-License-Identifier: MIT
"""Storage backend factory.

Reads ``STORAGE_BACKEND`` env var (default ``"local"``) and returns the
appropriate singleton backend instance.
"""

from __future__ import annotations

import os
from functools import lru_cache

from .local import LocalStorageBackend
from .protocol import StorageBackend


@lru_cache(maxsize=1)
def get_storage() -> StorageBackend:
    """Return the configured :class:`StorageBackend` (cached singleton).

    Configuration
    -------------
    ``STORAGE_BACKEND``
        ``"local"`` (default) – uses ``IMAGE_PATH`` / ``VIDEO_PATH`` or ``STORAGE_PATH``.
    """
    backend_type = os.getenv("STORAGE_BACKEND", "local").lower()

    if backend_type == "local":
        return LocalStorageBackend()

    raise RuntimeError(f"Unknown STORAGE_BACKEND: {backend_type!r}. Use 'local'.")

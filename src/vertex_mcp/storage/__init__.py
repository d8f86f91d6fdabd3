# SPDX-License-Identifier: MIT
"""Pluggable storage backend for generated media.

Usage::

    from vertex_mcp.storage import get_storage

    storage = get_storage()
    await storage.write("video", "video_1700000000_a1b2c3.mp4", video_bytes)
    data = await storage.read("image", "last_frame.png")
"""

from .factory import get_storage
from .protocol import PathType, StorageBackend

__all__ = ["PathType", "StorageBackend", "get_storage"]

# SPDX-License-Identifier: MIT
"""Utility functions for the Vertex AI MCP server."""

import secrets
import time


def generate_filename(prefix: str, extension: str, use_timestamp: bool = True) -> str:
    """Generate a filename for a generated artifact.

    Args:
        prefix: Base name (e.g. "image", "video")
        extension: File extension without the dot
        use_timestamp: Add a Unix timestamp and a random suffix so that
            artifacts saved in the same second never collide

    Returns:
        Filename such as ``image_1700000000_a1b2c3.png``
    """
    if use_timestamp:
        return f"{prefix}_{int(time.time())}_{secrets.token_hex(3)}.{extension}"
    return f"{prefix}.{extension}"

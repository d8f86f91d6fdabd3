# SPDX-License-Identifier: MIT
"""Helpers shared by the generation tools."""

import anyio

from ..config import logger
from ..storage import PathType, get_storage
from ..types import GenerationResult
from ..utils import generate_filename


async def save_artifacts(path_type: PathType, artifacts: list[bytes], extension: str) -> list[tuple[str, str]]:
    """Write artifacts to storage concurrently, preserving their order.

    Returns:
        ``(filename, path)`` pairs, one per artifact

    Raises:
        ValueError: Invalid filename or artifact larger than the size limit
        OSError: Disk write failure
    """
    storage = get_storage()
    saved: list[tuple[str, str]] = [("", "")] * len(artifacts)

    async def _save(index: int, data: bytes) -> None:
        filename = generate_filename(path_type, extension)
        while await storage.exists(path_type, filename):
            filename = generate_filename(path_type, extension)
        path = await storage.write(path_type, filename, data)
        saved[index] = (filename, path)
        logger.info("Saved %s %d/%d to %s", path_type, index + 1, len(artifacts), path)

    try:
        async with anyio.create_task_group() as tg:
            for index, data in enumerate(artifacts):
                tg.start_soon(_save, index, data)
    except ExceptionGroup as eg:
        # Surface the first write failure, not the group
        raise eg.exceptions[0] from eg

    return saved


def success_result(kind: str, saved: list[tuple[str, str]]) -> GenerationResult:
    return {
        "success": True,
        "file_paths": [path for _, path in saved],
        "filenames": [filename for filename, _ in saved],
        "count": len(saved),
        "message": f"Successfully generated {len(saved)} {kind}(s)",
    }


def failure_result(kind: str, error: Exception) -> GenerationResult:
    logger.error("Failed to generate %s: %s", kind, error)
    return {"success": False, "count": 0, "message": f"Failed to generate {kind}: {error}"}

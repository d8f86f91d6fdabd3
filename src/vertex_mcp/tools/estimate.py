# SPDX-License-Identifier: MIT
"""Cost estimation and model discovery tools."""

from typing import Literal

from ..config import logger
from ..cost import estimate_image_cost, estimate_video_cost
from ..generation import get_service
from ..types import CostEstimateResult


async def estimate_cost(
    type: Literal["image", "video"],
    number_of_images: int = 1,
    image_size: Literal["1K", "2K"] = "1K",
    number_of_videos: int = 1,
    duration_seconds: int = 5,
    resolution: Literal["720p", "1080p"] = "720p",
    generate_audio: bool = False,
) -> CostEstimateResult:
    """Estimate the cost of an image or video request without running it."""
    if type == "image":
        estimate = estimate_image_cost(number_of_images, image_size)
    elif type == "video":
        estimate = estimate_video_cost(number_of_videos, duration_seconds, resolution, generate_audio)
    else:
        return {"success": False, "estimate": "", "message": f"Failed to estimate cost: unknown type {type!r}"}

    logger.debug("Cost estimate for %s: %s", type, estimate)
    return {"success": True, "estimate": estimate, "message": f"Cost estimation for {type} generation"}


async def list_models() -> list[str]:
    """List model names available to the configured credentials (cached five minutes)."""
    return await get_service().list_available_models()

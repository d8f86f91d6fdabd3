# SPDX-License-Identifier: MIT
"""Rough cost estimates for image and video generation.

The per-unit prices are example values, not a billing source of truth.
"""

IMAGE_COST_PER_1K = 0.04
IMAGE_COST_PER_2K = 0.08

VIDEO_COST_PER_SECOND_720P = 0.10
VIDEO_COST_PER_SECOND_1080P = 0.20
AUDIO_COST_MULTIPLIER = 1.5


def estimate_image_cost(number_of_images: int = 1, image_size: str = "1K") -> str:
    cost_per_image = IMAGE_COST_PER_2K if image_size == "2K" else IMAGE_COST_PER_1K
    total = number_of_images * cost_per_image
    return f"Estimated cost: ${total:.4f} for {number_of_images} {image_size} image(s)"


def estimate_video_cost(
    number_of_videos: int = 1,
    duration_seconds: int = 5,
    resolution: str = "720p",
    generate_audio: bool = False,
) -> str:
    cost_per_second = VIDEO_COST_PER_SECOND_1080P if resolution == "1080p" else VIDEO_COST_PER_SECOND_720P
    total = number_of_videos * duration_seconds * cost_per_second
    if generate_audio:
        total *= AUDIO_COST_MULTIPLIER

    audio = " with audio" if generate_audio else ""
    return (
        f"Estimated cost: ${total:.4f} for {number_of_videos} {resolution} video(s) "
        f"({duration_seconds}s each){audio}"
    )

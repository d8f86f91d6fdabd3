# SPDX-License-Identifier: MIT
"""Video generation tools using Veo on Vertex AI.

This module handles video operations:
- Generating videos (submit, poll until done, save to VIDEO_PATH)
- Checking the status of a video operation by name
- Cancelling a video operation (not supported by the provider)
"""

import base64
import io

import anyio
from PIL import Image, UnidentifiedImageError

from ..config import logger
from ..exceptions import GenerationError
from ..generation import get_service
from ..storage import StorageBackend, get_storage
from ..types import (
    CancelResult,
    GenerationResult,
    InputImage,
    OperationStatusResult,
    VideoGenerationOptions,
    VideoReferenceImage,
)
from .common import failure_result, save_artifacts, success_result

# ==================== HELPER FUNCTIONS ====================


async def _load_input_image(storage: StorageBackend, filename: str) -> InputImage:
    """Read an image from IMAGE_PATH and wrap it as an inline input image.

    Raises:
        ValueError: If the file is missing, escapes IMAGE_PATH or is not an image
    """
    data = await storage.read("image", filename)

    def _detect_mime_type() -> str:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "", "image/png")

    try:
        mime_type = await anyio.to_thread.run_sync(_detect_mime_type)
    except UnidentifiedImageError as e:
        raise ValueError(f"{filename} is not a valid image") from e

    logger.debug("Loaded input image %s (%s, %d bytes)", filename, mime_type, len(data))
    return InputImage(image_bytes=base64.b64encode(data).decode("utf-8"), mime_type=mime_type)


# ==================== PUBLIC API ====================


async def generate_video(
    prompt: str,
    number_of_videos: int = 1,
    duration_seconds: int = 8,
    aspect_ratio: str = "16:9",
    resolution: str = "720p",
    fps: int | None = None,
    seed: int | None = None,
    negative_prompt: str | None = None,
    enhance_prompt: bool | None = None,
    generate_audio: bool | None = None,
    person_generation: str | None = None,
    compression_quality: str = "OPTIMIZED",
    last_frame_filename: str | None = None,
    reference_image_filenames: list[str] | None = None,
    reference_type: str = "ASSET",
) -> GenerationResult:
    """Generate videos and save them to VIDEO_PATH.

    Blocks until the Veo operation finishes (polled every 15 seconds, at most
    10 minutes).

    Args:
        prompt: Text description of the video (max 1000 characters)
        number_of_videos: 1-4
        duration_seconds: 2-10
        aspect_ratio: "16:9" or "9:16"
        resolution: "720p" or "1080p"
        fps: Frames per second, 8-30
        seed: Fixed seed for reproducible output
        negative_prompt: What to keep out of the video
        enhance_prompt: Let the model rewrite the prompt
        generate_audio: Generate an audio track (Veo 3)
        person_generation: Person generation policy
        compression_quality: "OPTIMIZED" or "LOSSLESS"
        last_frame_filename: Image in IMAGE_PATH to use as the final frame
        reference_image_filenames: Up to 3 images in IMAGE_PATH to guide the video
        reference_type: "ASSET" or "STYLE", applied to every reference image

    Returns:
        GenerationResult with the saved file paths on success, or
        ``success=False`` and the failure reason in ``message``
    """
    try:
        last_frame = None
        reference_images = None
        if last_frame_filename or reference_image_filenames:
            storage = get_storage()
            if last_frame_filename:
                last_frame = await _load_input_image(storage, last_frame_filename)
            if reference_image_filenames:
                reference_images = tuple(
                    [
                        VideoReferenceImage(image=await _load_input_image(storage, name), reference_type=reference_type)
                        for name in reference_image_filenames
                    ]
                )

        options = VideoGenerationOptions(
            number_of_videos=number_of_videos,
            duration_seconds=duration_seconds,
            aspect_ratio=aspect_ratio,
            resolution=resolution,
            fps=fps,
            seed=seed,
            negative_prompt=negative_prompt,
            enhance_prompt=enhance_prompt,
            generate_audio=generate_audio,
            person_generation=person_generation,
            compression_quality=compression_quality,
            last_frame=last_frame,
            reference_images=reference_images,
        )
        videos = await get_service().generate_video(prompt, options)
        saved = await save_artifacts("video", videos, "mp4")
    except (GenerationError, ValueError, RuntimeError, OSError) as e:
        return failure_result("video", e)

    return success_result("video", saved)


async def get_video_operation_status(operation_name: str) -> OperationStatusResult:
    """Refresh a video operation once and report its state.

    Returns:
        The status fields with ``success=True``, or ``success=False`` and the
        failure reason in ``message`` when the name is blank or the provider call fails
    """
    try:
        status = await get_service().get_video_operation_status(operation_name)
    except GenerationError as e:
        logger.error("Failed to get status of %s: %s", operation_name, e)
        return {"success": False, "message": str(e)}
    return {"success": True, **status}


async def cancel_video_operation(operation_name: str) -> CancelResult:
    """Attempt to cancel a video operation.

    The provider has no cancellation endpoint, so this always reports failure;
    a running operation only stops early when its 10 minute ceiling is reached.
    """
    try:
        await get_service().cancel_video_operation(operation_name)
    except GenerationError as e:
        logger.warning("Cancel requested for %s: %s", operation_name, e)
        return {"success": False, "message": str(e)}
    return {"success": True, "message": f"Operation {operation_name} cancelled"}

# SPDX-License-Identifier: MIT
"""Parameter validation for image and video generation requests.

All checks are pure and run before anything is sent to the provider. The
first violated rule raises :class:`~vertex_mcp.exceptions.ValidationError`
naming the offending field and its valid range.
"""

from .exceptions import GenerationKind, ValidationError
from .types import ImageGenerationOptions, VideoGenerationOptions

MAX_PROMPT_LENGTH: dict[str, int] = {"image": 4000, "video": 1000}

IMAGE_ASPECT_RATIOS = ("1:1", "3:4", "4:3", "9:16", "16:9")
IMAGE_MIME_TYPES = ("image/jpeg", "image/png")
IMAGE_SIZES = ("1K", "2K")

VIDEO_ASPECT_RATIOS = ("16:9", "9:16")
VIDEO_RESOLUTIONS = ("720p", "1080p")
VIDEO_REFERENCE_TYPES = ("ASSET", "STYLE")
MAX_VIDEO_REFERENCE_IMAGES = 3


def _check_range(field: str, value: float | None, low: float, high: float, optional: bool = False) -> None:
    if value is None and optional:
        return
    if value is None or not low <= value <= high:
        raise ValidationError(field, f"{field} must be between {low:g} and {high:g}")


def _check_choice(field: str, value: str | None, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise ValidationError(field, f"{field} must be one of: {', '.join(choices)}")


def validate_prompt(kind: GenerationKind, prompt: str) -> str:
    """Check that a prompt is non-empty and within the per-kind length limit.

    Returns:
        The prompt with surrounding whitespace removed
    """
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValidationError("prompt", "Prompt is required and must be a non-empty string")

    limit = MAX_PROMPT_LENGTH[kind]
    if len(prompt) > limit:
        suffix = " for video generation" if kind == "video" else ""
        raise ValidationError("prompt", f"Prompt must be less than {limit} characters{suffix}")
    return prompt.strip()


def validate_image_options(options: ImageGenerationOptions) -> None:
    _check_range("number_of_images", options.number_of_images, 1, 8)
    _check_range("guidance_scale", options.guidance_scale, 1, 20, optional=True)
    _check_range("output_compression_quality", options.output_compression_quality, 1, 100)
    _check_choice("aspect_ratio", options.aspect_ratio, IMAGE_ASPECT_RATIOS)
    _check_choice("output_mime_type", options.output_mime_type, IMAGE_MIME_TYPES)
    _check_choice("image_size", options.image_size, IMAGE_SIZES)


def validate_video_options(options: VideoGenerationOptions) -> None:
    _check_range("number_of_videos", options.number_of_videos, 1, 4)
    _check_range("duration_seconds", options.duration_seconds, 2, 10)
    _check_range("fps", options.fps, 8, 30, optional=True)
    _check_choice("aspect_ratio", options.aspect_ratio, VIDEO_ASPECT_RATIOS)
    _check_choice("resolution", options.resolution, VIDEO_RESOLUTIONS)

    if options.reference_images:
        if len(options.reference_images) > MAX_VIDEO_REFERENCE_IMAGES:
            raise ValidationError(
                "reference_images",
                f"reference_images must contain at most {MAX_VIDEO_REFERENCE_IMAGES} images",
            )
        for ref in options.reference_images:
            _check_choice("reference_type", ref.reference_type, VIDEO_REFERENCE_TYPES)
        # Up to 3 ASSET images, or a single STYLE image on its own
        if any(ref.reference_type == "STYLE" for ref in options.reference_images) and len(options.reference_images) > 1:
            raise ValidationError(
                "reference_images",
                "reference_images must be up to 3 ASSET images or a single STYLE image",
            )


def validate(kind: GenerationKind, options: ImageGenerationOptions | VideoGenerationOptions) -> None:
    """Validate kind-specific options.

    Raises:
        ValidationError: On the first out-of-range field
        TypeError: If the options do not match the generation kind
    """
    if kind == "image" and isinstance(options, ImageGenerationOptions):
        validate_image_options(options)
    elif kind == "video" and isinstance(options, VideoGenerationOptions):
        validate_video_options(options)
    else:
        raise TypeError(f"{type(options).__name__} cannot be used for {kind} generation")

# SPDX-License-Identifier: MIT
"""Image generation tool using Imagen on Vertex AI.

Imagen answers synchronously, so the tool submits the request, decodes the
returned images and writes them to the image output directory in one call.
"""

from ..config import env_int
from ..exceptions import GenerationError
from ..generation import get_service
from ..types import GenerationResult, ImageGenerationOptions
from .common import failure_result, save_artifacts, success_result


async def generate_image(
    prompt: str,
    aspect_ratio: str = "1:1",
    number_of_images: int = 1,
    image_size: str = "1K",
    output_mime_type: str = "image/png",
    output_compression_quality: int | None = None,
    negative_prompt: str | None = None,
    guidance_scale: float | None = None,
    seed: int | None = None,
    safety_filter_level: str | None = None,
    person_generation: str | None = None,
    enhance_prompt: bool | None = None,
    add_watermark: bool | None = None,
    language: str | None = None,
) -> GenerationResult:
    """Generate images and save them to IMAGE_PATH.

    Args:
        prompt: Text description of the image (max 4000 characters)
        aspect_ratio: "1:1", "3:4", "4:3", "9:16" or "16:9"
        number_of_images: 1-8
        image_size: "1K" or "2K"
        output_mime_type: "image/png" or "image/jpeg"
        output_compression_quality: Compression quality 1-100 (default: DEFAULT_OUTPUT_QUALITY or 85)
        negative_prompt: What to keep out of the image
        guidance_scale: Prompt adherence, 1-20
        seed: Fixed seed for reproducible output
        safety_filter_level: Overrides SAFETY_FILTER_LEVEL
        person_generation: Overrides PERSON_GENERATION
        enhance_prompt: Let the model rewrite the prompt
        add_watermark: Add a SynthID watermark
        language: Prompt language code

    Returns:
        GenerationResult with the saved file paths on success, or
        ``success=False`` and the failure reason in ``message``
    """
    try:
        if output_compression_quality is None:
            output_compression_quality = env_int("DEFAULT_OUTPUT_QUALITY", 85)
        options = ImageGenerationOptions(
            aspect_ratio=aspect_ratio,
            number_of_images=number_of_images,
            image_size=image_size,
            output_mime_type=output_mime_type,
            output_compression_quality=output_compression_quality,
            negative_prompt=negative_prompt,
            guidance_scale=guidance_scale,
            seed=seed,
            safety_filter_level=safety_filter_level,
            person_generation=person_generation,
            enhance_prompt=enhance_prompt,
            add_watermark=add_watermark,
            language=language,
        )
        images = await get_service().generate_image(prompt, options)
        saved = await save_artifacts("image", images, options.file_extension)
    except (GenerationError, ValueError, RuntimeError, OSError) as e:
        return failure_result("image", e)

    return success_result("image", saved)

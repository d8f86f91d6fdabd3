# SPDX-License-Identifier: MIT
"""Google Gen AI provider adapter.

Wraps the synchronous ``google-genai`` client in worker threads so calls never
block the event loop, and converts SDK responses into the immutable
:class:`~vertex_mcp.types.OperationSnapshot` / :class:`~vertex_mcp.types.ResultItem`
types used by the rest of the server.
"""

import base64
import binascii
from typing import Any

import anyio
from google.genai import types as genai_types

from .config import get_generation_defaults, get_google_client, logger
from .exceptions import ValidationError
from .types import (
    ImageGenerationOptions,
    InputImage,
    OperationSnapshot,
    ResultItem,
    VideoGenerationOptions,
)

# ==================== CONVERSION HELPERS ====================


def _to_sdk_image(image: InputImage, field: str) -> genai_types.Image:
    """Convert a tool-supplied image into an SDK ``Image``."""
    if image.image_bytes:
        try:
            raw = base64.b64decode(image.image_bytes, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(field, f"{field}.image_bytes must be base64-encoded: {e}") from e
        return genai_types.Image(image_bytes=raw, mime_type=image.mime_type)
    if image.gcs_uri:
        return genai_types.Image(gcs_uri=image.gcs_uri, mime_type=image.mime_type)
    raise ValidationError(field, f"{field} requires gcs_uri or image_bytes")


def build_image_config(options: ImageGenerationOptions) -> genai_types.GenerateImagesConfig:
    """Build the SDK config for an Imagen request, filling server-wide defaults."""
    defaults = get_generation_defaults()
    return genai_types.GenerateImagesConfig(
        aspect_ratio=options.aspect_ratio,
        number_of_images=options.number_of_images,
        negative_prompt=options.negative_prompt,
        language=options.language,
        guidance_scale=options.guidance_scale,
        seed=options.seed,
        safety_filter_level=options.safety_filter_level or defaults["safety_filter_level"],
        person_generation=options.person_generation or defaults["person_generation"],
        include_safety_attributes=options.include_safety_attributes,
        include_rai_reason=options.include_rai_reason,
        output_mime_type=options.output_mime_type,
        output_compression_quality=options.output_compression_quality,
        add_watermark=options.add_watermark,
        image_size=options.image_size,
        enhance_prompt=options.enhance_prompt,
    )


def build_video_config(options: VideoGenerationOptions) -> genai_types.GenerateVideosConfig:
    """Build the SDK config for a Veo request."""
    last_frame = _to_sdk_image(options.last_frame, "last_frame") if options.last_frame else None
    reference_images = None
    if options.reference_images:
        reference_images = [
            genai_types.VideoGenerationReferenceImage(
                image=_to_sdk_image(ref.image, "reference_images"),
                reference_type=ref.reference_type,
            )
            for ref in options.reference_images
        ]

    return genai_types.GenerateVideosConfig(
        number_of_videos=options.number_of_videos,
        duration_seconds=options.duration_seconds,
        aspect_ratio=options.aspect_ratio,
        resolution=options.resolution,
        fps=options.fps,
        seed=options.seed,
        negative_prompt=options.negative_prompt,
        enhance_prompt=options.enhance_prompt,
        generate_audio=options.generate_audio,
        person_generation=options.person_generation,
        compression_quality=options.compression_quality,
        last_frame=last_frame,
        reference_images=reference_images,
    )


def snapshot_from_operation(operation: Any) -> OperationSnapshot:
    """Convert an SDK ``GenerateVideosOperation`` into an immutable snapshot."""
    response = operation.response or getattr(operation, "result", None)
    results: tuple[ResultItem, ...] | None = None
    if response is not None and response.generated_videos is not None:
        items = []
        for generated in response.generated_videos:
            video = generated.video
            if video is None:
                items.append(ResultItem())
                continue
            items.append(ResultItem(inline_bytes=video.video_bytes, remote_uri=video.uri, mime_type=video.mime_type))
        results = tuple(items)

    return OperationSnapshot(
        name=operation.name,
        done=bool(operation.done),
        error=operation.error,
        results=results,
        metadata=operation.metadata,
    )


def items_from_image_response(response: Any) -> list[ResultItem]:
    """Convert an SDK ``GenerateImagesResponse`` into result items."""
    items: list[ResultItem] = []
    for generated in response.generated_images or []:
        image = generated.image
        if image is None:
            if getattr(generated, "rai_filtered_reason", None):
                logger.warning("Image filtered by safety policy: %s", generated.rai_filtered_reason)
            items.append(ResultItem())
            continue
        items.append(ResultItem(inline_bytes=image.image_bytes, remote_uri=image.gcs_uri, mime_type=image.mime_type))
    return items


# ==================== PROVIDER ====================


class GoogleGenAIProvider:
    """Remote generation provider backed by Vertex AI / Gemini.

    Args:
        client: Optional ``google.genai.Client``. Defaults to :func:`get_google_client`
            resolved on first use so that credentials are only required when a tool runs.
    """

    def __init__(self, client: Any = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_google_client()
        return self._client

    async def submit_image(self, model: str, prompt: str, options: ImageGenerationOptions) -> list[ResultItem]:
        """Generate images synchronously (Imagen returns the result directly)."""
        config = build_image_config(options)
        client = self.client

        def _call() -> Any:
            return client.models.generate_images(model=model, prompt=prompt, config=config)

        response = await anyio.to_thread.run_sync(_call)
        return items_from_image_response(response)

    async def submit_video(self, model: str, prompt: str, options: VideoGenerationOptions) -> OperationSnapshot:
        """Start a Veo job and return the initial operation snapshot."""
        config = build_video_config(options)
        client = self.client

        def _call() -> Any:
            return client.models.generate_videos(model=model, prompt=prompt, config=config)

        operation = await anyio.to_thread.run_sync(_call)
        return snapshot_from_operation(operation)

    async def refresh(self, name: str) -> OperationSnapshot:
        """Fetch a fresh snapshot of a video operation by name."""
        client = self.client
        handle = genai_types.GenerateVideosOperation(name=name)

        def _call() -> Any:
            return client.operations.get(handle)

        operation = await anyio.to_thread.run_sync(_call)
        return snapshot_from_operation(operation)

    async def list_models(self) -> list[str]:
        """List model names visible to the configured credentials."""
        client = self.client

        def _call() -> list[str]:
            return [model.name for model in client.models.list() if model.name]

        return await anyio.to_thread.run_sync(_call)

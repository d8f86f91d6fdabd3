# SPDX-License-Identifier: MIT
"""Generation façade: validate, submit, track, normalize.

Image generation is synchronous: the provider returns result items directly.
Video generation is asynchronous: the provider returns an operation that the
:class:`~vertex_mcp.tracker.OperationTracker` polls until it finishes.

Any failure is re-raised as :class:`~vertex_mcp.exceptions.GenerationError`
tagged with the stage it came from, with the original exception chained.
"""

from functools import lru_cache
from typing import Protocol

from async_lru import alru_cache

from .config import get_image_model, get_video_model, logger
from .exceptions import (
    GenerationError,
    GenerationKind,
    OperationUnsupportedError,
    ValidationError,
)
from .normalizer import RemoteObjectFetcher, UnsupportedRemoteFetcher, normalize_results
from .provider import GoogleGenAIProvider
from .tracker import OperationTracker
from .types import (
    ImageGenerationOptions,
    OperationSnapshot,
    OperationStatus,
    ResultItem,
    VideoGenerationOptions,
)
from .validation import validate, validate_prompt


class GenerationProvider(Protocol):
    """Remote generation provider interface."""

    async def submit_image(self, model: str, prompt: str, options: ImageGenerationOptions) -> list[ResultItem]: ...

    async def submit_video(self, model: str, prompt: str, options: VideoGenerationOptions) -> OperationSnapshot: ...

    async def refresh(self, name: str) -> OperationSnapshot: ...

    async def list_models(self) -> list[str]: ...


class GenerationService:
    """Runs image and video generation requests end to end.

    Args:
        provider: Remote provider. Defaults to :class:`GoogleGenAIProvider`.
        tracker: Poll loop for video operations. Defaults to one bound to ``provider.refresh``.
        fetcher: Remote-locator fetcher for result items. Defaults to the unsupported fetcher.
    """

    def __init__(
        self,
        provider: GenerationProvider | None = None,
        tracker: OperationTracker | None = None,
        fetcher: RemoteObjectFetcher | None = None,
    ) -> None:
        self.provider: GenerationProvider = provider or GoogleGenAIProvider()
        self.tracker = tracker or OperationTracker(self.provider.refresh)
        self.fetcher = fetcher or UnsupportedRemoteFetcher()

    def _check(
        self, kind: GenerationKind, prompt: str, options: ImageGenerationOptions | VideoGenerationOptions
    ) -> str:
        try:
            prompt = validate_prompt(kind, prompt)
            validate(kind, options)
        except ValidationError as e:
            raise GenerationError(kind, "validation", e) from e
        return prompt

    async def _normalize(self, kind: GenerationKind, items: list[ResultItem]) -> list[bytes]:
        try:
            return await normalize_results(items, kind, self.fetcher)
        except Exception as e:
            raise GenerationError(kind, "normalization", e) from e

    async def generate_image(self, prompt: str, options: ImageGenerationOptions | None = None) -> list[bytes]:
        """Generate images with Imagen.

        Returns:
            Raw image bytes, one entry per generated image

        Raises:
            GenerationError: Validation, submission or normalization failure
        """
        options = options or ImageGenerationOptions()
        prompt = self._check("image", prompt, options)

        model = get_image_model()
        logger.info("Generating %d image(s) with %s", options.number_of_images, model)
        try:
            items = await self.provider.submit_image(model, prompt, options)
        except Exception as e:
            raise GenerationError("image", "submission", e) from e

        images = await self._normalize("image", items)
        logger.info("Successfully generated %d image(s)", len(images))
        return images

    async def generate_video(self, prompt: str, options: VideoGenerationOptions | None = None) -> list[bytes]:
        """Generate videos with Veo, polling the operation until it finishes.

        Returns:
            Raw video bytes, one entry per generated video

        Raises:
            GenerationError: Validation, submission, tracking or normalization failure
        """
        options = options or VideoGenerationOptions()
        prompt = self._check("video", prompt, options)

        model = get_video_model()
        try:
            operation = await self.provider.submit_video(model, prompt, options)
        except Exception as e:
            raise GenerationError("video", "submission", e) from e

        logger.info(
            "Video generation started (%d videos, operation %s), waiting for completion...",
            options.number_of_videos,
            operation.name,
        )
        try:
            items = await self.tracker.wait(operation)
        except Exception as e:
            raise GenerationError("video", "tracking", e) from e

        videos = await self._normalize("video", items)
        logger.info("Successfully generated %d video(s)", len(videos))
        return videos

    async def get_video_operation_status(self, name: str) -> OperationStatus:
        """Refresh a video operation once and report its state."""
        if not name or not name.strip():
            raise GenerationError("video", "status", ValidationError("operation_name", "Operation name is required"))
        try:
            operation = await self.provider.refresh(name.strip())
        except Exception as e:
            raise GenerationError("video", "status", e) from e
        return {
            "name": operation.name,
            "done": operation.done,
            "error": operation.error,
            "metadata": operation.metadata,
            "has_response": operation.results is not None,
        }

    async def cancel_video_operation(self, name: str) -> None:
        """Cancel a video operation.

        Raises:
            GenerationError: Always; the provider exposes no cancellation endpoint
        """
        cause = OperationUnsupportedError(f"Operation cancellation not yet supported by the API ({name})")
        raise GenerationError("video", "cancellation", cause) from cause

    async def list_available_models(self) -> list[str]:
        return await _cached_model_list(self.provider)

    async def validate_service(self) -> bool:
        """Check that credentials work by listing models."""
        try:
            models = await self.list_available_models()
        except Exception as e:
            logger.error("Google GenAI service validation failed: %s", e)
            return False
        return len(models) > 0


@alru_cache(maxsize=4, ttl=300)
async def _cached_model_list(provider: GenerationProvider) -> list[str]:
    """Model names per provider, cached for five minutes."""
    return await provider.list_models()


@lru_cache(maxsize=1)
def get_service() -> GenerationService:
    """Shared :class:`GenerationService` used by the MCP tools (cached)."""
    return GenerationService()

# SPDX-License-Identifier: MIT
"""Shared types for requests, provider results and tool responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict

# ---------- Request options ----------


class ImageGenerationOptions(BaseModel):
    """Options for an Imagen request.

    Fields are loosely typed on purpose: range and enum checks live in
    :mod:`vertex_mcp.validation` so that a bad value is reported with the
    offending field and its valid range.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    aspect_ratio: str = "1:1"
    number_of_images: int = 1
    image_size: str = "1K"
    output_mime_type: str = "image/png"
    output_compression_quality: int = 85
    guidance_scale: float | None = None
    safety_filter_level: str | None = None
    person_generation: str | None = None
    negative_prompt: str | None = None
    seed: int | None = None
    enhance_prompt: bool | None = None
    language: str | None = None
    add_watermark: bool | None = None
    include_safety_attributes: bool = False
    include_rai_reason: bool = False

    @property
    def file_extension(self) -> str:
        return "png" if self.output_mime_type == "image/png" else "jpg"


class InputImage(BaseModel):
    """An image supplied to video generation (last frame or reference)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gcs_uri: str | None = None
    image_bytes: str | None = None  # base64
    mime_type: str | None = None


class VideoReferenceImage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    image: InputImage
    reference_type: str = "ASSET"


class VideoGenerationOptions(BaseModel):
    """Options for a Veo request. Range checks live in :mod:`vertex_mcp.validation`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    number_of_videos: int = 1
    duration_seconds: int = 8
    aspect_ratio: str = "16:9"
    resolution: str = "720p"
    fps: int | None = None
    seed: int | None = None
    negative_prompt: str | None = None
    enhance_prompt: bool | None = None
    generate_audio: bool | None = None
    person_generation: str | None = None
    compression_quality: str = "OPTIMIZED"
    last_frame: InputImage | None = None
    reference_images: tuple[VideoReferenceImage, ...] | None = None


# ---------- Provider results ----------


@dataclass(frozen=True)
class ResultItem:
    """One generated media item as returned by the provider.

    Exactly one of ``inline_bytes`` / ``remote_uri`` is expected. ``inline_bytes``
    holds raw bytes (SDK responses) or base64 text (raw REST payloads).
    """

    inline_bytes: bytes | str | None = None
    remote_uri: str | None = None
    mime_type: str | None = None


@dataclass(frozen=True)
class OperationSnapshot:
    """Immutable view of a long-running video operation.

    Each refresh produces a brand new snapshot; nothing is merged in place.
    """

    name: str | None
    done: bool = False
    error: dict[str, Any] | None = None
    results: tuple[ResultItem, ...] | None = None
    metadata: dict[str, Any] | None = field(default=None, compare=False)


# ---------- Tool responses ----------


class GenerationResult(TypedDict, total=False):
    """Structured response returned by the generation tools."""

    success: bool
    file_paths: list[str]
    filenames: list[str]
    count: int
    message: str


class CostEstimateResult(TypedDict):
    success: bool
    estimate: str
    message: str


class OperationStatus(TypedDict):
    """Status of a video operation as reported by the provider."""

    name: str | None
    done: bool
    error: dict[str, Any] | None
    metadata: dict[str, Any] | None
    has_response: bool


class OperationStatusResult(TypedDict, total=False):
    """Response of the operation status tool: the status fields on success, ``message`` on failure."""

    success: bool
    message: str
    name: str | None
    done: bool
    error: dict[str, Any] | None
    metadata: dict[str, Any] | None
    has_response: bool


class CancelResult(TypedDict):
    success: bool
    message: str

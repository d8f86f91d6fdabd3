# SPDX-License-Identifier: MIT
"""Vertex AI MCP Server - FastMCP server for Imagen and Veo generation.

This module initializes the FastMCP server and registers all tools.
Business logic is organized into submodules under tools/.
"""

import os
from typing import Literal

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from .config import configure_logging, env_flag, env_int, logger
from .descriptions import (
    CANCEL_VIDEO_OPERATION,
    ESTIMATE_COST,
    GENERATE_IMAGE,
    GENERATE_VIDEO,
    GET_VIDEO_OPERATION_STATUS,
    LIST_MODELS,
)
from .tools import estimate, image, video

SERVICE_NAME = "mcp-google-vertex"

# Initialize FastMCP server
mcp = FastMCP(SERVICE_NAME)


# ==================== IMAGE TOOLS ====================
@mcp.tool(description=GENERATE_IMAGE)
async def generate_image(
    prompt: str,
    aspect_ratio: Literal["1:1", "3:4", "4:3", "9:16", "16:9"] = "1:1",
    number_of_images: int = 1,
    image_size: Literal["1K", "2K"] = "1K",
    output_mime_type: Literal["image/png", "image/jpeg"] = "image/png",
    output_compression_quality: int | None = None,
    negative_prompt: str | None = None,
    guidance_scale: float | None = None,
    seed: int | None = None,
    safety_filter_level: str | None = None,
    person_generation: str | None = None,
    enhance_prompt: bool | None = None,
    add_watermark: bool | None = None,
    language: str | None = None,
):
    return await image.generate_image(
        prompt,
        aspect_ratio,
        number_of_images,
        image_size,
        output_mime_type,
        output_compression_quality,
        negative_prompt,
        guidance_scale,
        seed,
        safety_filter_level,
        person_generation,
        enhance_prompt,
        add_watermark,
        language,
    )


# ==================== VIDEO TOOLS ====================
@mcp.tool(description=GENERATE_VIDEO)
async def generate_video(
    prompt: str,
    number_of_videos: int = 1,
    duration_seconds: int = 8,
    aspect_ratio: Literal["16:9", "9:16"] = "16:9",
    resolution: Literal["720p", "1080p"] = "720p",
    fps: int | None = None,
    seed: int | None = None,
    negative_prompt: str | None = None,
    enhance_prompt: bool | None = None,
    generate_audio: bool | None = None,
    person_generation: str | None = None,
    compression_quality: Literal["OPTIMIZED", "LOSSLESS"] = "OPTIMIZED",
    last_frame_filename: str | None = None,
    reference_image_filenames: list[str] | None = None,
    reference_type: Literal["ASSET", "STYLE"] = "ASSET",
):
    return await video.generate_video(
        prompt,
        number_of_videos,
        duration_seconds,
        aspect_ratio,
        resolution,
        fps,
        seed,
        negative_prompt,
        enhance_prompt,
        generate_audio,
        person_generation,
        compression_quality,
        last_frame_filename,
        reference_image_filenames,
        reference_type,
    )


@mcp.tool(description=GET_VIDEO_OPERATION_STATUS)
async def get_video_operation_status(operation_name: str):
    return await video.get_video_operation_status(operation_name)


@mcp.tool(description=CANCEL_VIDEO_OPERATION)
async def cancel_video_operation(operation_name: str):
    return await video.cancel_video_operation(operation_name)


# ==================== UTILITY TOOLS ====================
@mcp.tool(description=ESTIMATE_COST)
async def estimate_cost(
    type: Literal["image", "video"],
    number_of_images: int = 1,
    image_size: Literal["1K", "2K"] = "1K",
    number_of_videos: int = 1,
    duration_seconds: int = 5,
    resolution: Literal["720p", "1080p"] = "720p",
    generate_audio: bool = False,
):
    return await estimate.estimate_cost(
        type, number_of_images, image_size, number_of_videos, duration_seconds, resolution, generate_audio
    )


@mcp.tool(description=LIST_MODELS)
async def list_models():
    return await estimate.list_models()


# ==================== HTTP ROUTES ====================
@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> Response:
    return JSONResponse({"status": "ok", "service": SERVICE_NAME})


# ==================== SERVER ENTRYPOINT ====================
def main():
    """Run the MCP server.

    ``MCP_TRANSPORT`` selects ``stdio`` (default) or ``streamable-http``
    (served on ``HOST``:``PORT`` with a ``/health`` route). Paths and
    credentials are validated lazily when tools are called.
    """
    load_dotenv()  # Load environment variables at runtime
    configure_logging(env_flag("MCP_QUIET"))

    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower()
    if transport == "http":
        transport = "streamable-http"
    if transport not in ("stdio", "streamable-http"):
        raise RuntimeError(f"Unknown MCP_TRANSPORT: {transport!r}. Use 'stdio' or 'streamable-http'.")

    if transport == "streamable-http":
        mcp.settings.host = os.getenv("HOST", "127.0.0.1")
        mcp.settings.port = env_int("PORT", 3000)
        logger.info("Starting %s over streamable HTTP on %s:%d", SERVICE_NAME, mcp.settings.host, mcp.settings.port)
    else:
        logger.info("Starting %s over stdio", SERVICE_NAME)

    mcp.run(transport=transport)


if __name__ == "__main__":
    main()

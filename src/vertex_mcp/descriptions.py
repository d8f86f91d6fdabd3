# SPDX-License-Identifier: MIT
"""Tool descriptions for MCP server. Optimized for token efficiency."""

# ==================== IMAGE TOOL DESCRIPTIONS ====================

GENERATE_IMAGE = """Generate images with Imagen (Vertex AI). Synchronous: images are saved to IMAGE_PATH before returning.

Params: prompt (max 4000 chars), aspect_ratio (1:1|3:4|4:3|9:16|16:9), number_of_images (1-8), image_size (1K|2K), output_mime_type (image/png|image/jpeg), output_compression_quality (1-100), negative_prompt, guidance_scale (1-20), seed, safety_filter_level, person_generation, enhance_prompt, add_watermark, language

Returns: success, file_paths, filenames, count, message

Example: generate_image("a red fox in snow", aspect_ratio="16:9", number_of_images=2)"""


# ==================== VIDEO TOOL DESCRIPTIONS ====================

GENERATE_VIDEO = """Generate videos with Veo (Vertex AI). Blocks until done (polled every 15s, 10 minute limit); videos are saved to VIDEO_PATH.

Params: prompt (max 1000 chars), number_of_videos (1-4), duration_seconds (2-10), aspect_ratio (16:9|9:16), resolution (720p|1080p), fps (8-30), seed, negative_prompt, enhance_prompt, generate_audio, person_generation, compression_quality (OPTIMIZED|LOSSLESS), last_frame_filename (image in IMAGE_PATH), reference_image_filenames (up to 3 images in IMAGE_PATH), reference_type (ASSET|STYLE)

Returns: success, file_paths, filenames, count, message

Example: generate_video("waves at sunset", duration_seconds=8, resolution="1080p")"""

GET_VIDEO_OPERATION_STATUS = """Check a Veo operation once by name.

Returns: success, name, done, error, metadata, has_response.
On failure returns success=false with a message."""

CANCEL_VIDEO_OPERATION = """Cancel a Veo operation. Not supported by the API: always returns success=false.

Params: operation_name"""


# ==================== UTILITY TOOL DESCRIPTIONS ====================

ESTIMATE_COST = """Estimate the cost of an image or video request (example prices, not billing data).

Params: type (image|video), number_of_images, image_size (1K|2K), number_of_videos, duration_seconds, resolution (720p|1080p), generate_audio

Example: estimate_cost("video", number_of_videos=2, duration_seconds=8, resolution="1080p")"""

LIST_MODELS = """List model names available to the configured Google credentials. Cached for five minutes."""

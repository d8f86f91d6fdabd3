# SPDX-License-Identifier: MIT
"""Integration tests for video tools with a mocked generation service."""

import base64

import pytest

from vertex_mcp.exceptions import GenerationError, OperationTimeoutError
from vertex_mcp.storage.local import LocalStorageBackend
from vertex_mcp.tools.video import cancel_video_operation, generate_video, get_video_operation_status


@pytest.fixture
def media_storage(mocker, tmp_image_path, tmp_video_path):
    backend = LocalStorageBackend(path_overrides={"image": tmp_image_path, "video": tmp_video_path})
    mocker.patch("vertex_mcp.tools.common.get_storage", return_value=backend)
    mocker.patch("vertex_mcp.tools.video.get_storage", return_value=backend)
    return backend


@pytest.fixture
def mock_service(mocker):
    mock_get_service = mocker.patch("vertex_mcp.tools.video.get_service")
    mock_get_service.return_value.generate_video = mocker.AsyncMock(return_value=[b"MP4-1"])
    return mock_get_service.return_value


@pytest.mark.integration
async def test_generate_video_saves_file(media_storage, mock_service, tmp_video_path):
    result = await generate_video("waves at sunset", duration_seconds=6, resolution="1080p")

    assert result["success"] is True
    assert result["count"] == 1
    assert result["message"] == "Successfully generated 1 video(s)"
    filename = result["filenames"][0]
    assert filename.startswith("video_") and filename.endswith(".mp4")
    assert (tmp_video_path / filename).read_bytes() == b"MP4-1"

    prompt, options = mock_service.generate_video.call_args.args
    assert prompt == "waves at sunset"
    assert options.duration_seconds == 6
    assert options.resolution == "1080p"
    assert options.last_frame is None
    assert options.reference_images is None


@pytest.mark.integration
async def test_generate_video_with_input_images(
    media_storage, mock_service, tmp_image_path, sample_image, png_bytes, jpeg_bytes
):
    (tmp_image_path / "style.jpg").write_bytes(jpeg_bytes)

    result = await generate_video(
        "a fox running",
        last_frame_filename=sample_image.name,
        reference_image_filenames=["style.jpg", sample_image.name],
        reference_type="ASSET",
    )

    assert result["success"] is True
    _, options = mock_service.generate_video.call_args.args
    assert options.last_frame.mime_type == "image/png"
    assert base64.b64decode(options.last_frame.image_bytes) == png_bytes
    assert [ref.image.mime_type for ref in options.reference_images] == ["image/jpeg", "image/png"]
    assert all(ref.reference_type == "ASSET" for ref in options.reference_images)


@pytest.mark.integration
async def test_missing_last_frame(media_storage, mock_service):
    result = await generate_video("a fox", last_frame_filename="missing.png")

    assert result["success"] is False
    assert result["message"] == "Failed to generate video: File not found: missing.png"
    mock_service.generate_video.assert_not_called()


@pytest.mark.integration
async def test_reference_image_not_an_image(media_storage, mock_service, tmp_image_path):
    (tmp_image_path / "notes.png").write_bytes(b"just text")

    result = await generate_video("a fox", reference_image_filenames=["notes.png"])

    assert result["success"] is False
    assert "notes.png is not a valid image" in result["message"]


@pytest.mark.integration
async def test_reference_image_traversal(media_storage, mock_service):
    result = await generate_video("a fox", reference_image_filenames=["../../etc/passwd"])

    assert result["success"] is False
    assert "path traversal" in result["message"]


@pytest.mark.integration
async def test_tracking_failure_becomes_failure_response(media_storage, mock_service, tmp_video_path):
    cause = OperationTimeoutError(600, "operations/op-1")
    mock_service.generate_video.side_effect = GenerationError("video", "tracking", cause)

    result = await generate_video("a fox")

    assert result == {
        "success": False,
        "count": 0,
        "message": "Failed to generate video: Video tracking failed: Video generation timed out after 10 minutes",
    }
    assert list(tmp_video_path.iterdir()) == []


@pytest.mark.integration
async def test_get_video_operation_status(mocker):
    status = {"name": "operations/op-1", "done": False, "error": None, "metadata": None, "has_response": False}
    mock_get_service = mocker.patch("vertex_mcp.tools.video.get_service")
    mock_get_service.return_value.get_video_operation_status = mocker.AsyncMock(return_value=status)

    assert await get_video_operation_status("operations/op-1") == {"success": True, **status}
    mock_get_service.return_value.get_video_operation_status.assert_called_once_with("operations/op-1")


@pytest.mark.integration
async def test_get_video_operation_status_reports_failure(mocker):
    mocker.patch("vertex_mcp.generation.GoogleGenAIProvider")

    result = await get_video_operation_status("   ")

    assert result == {"success": False, "message": "Video status failed: Operation name is required"}


@pytest.mark.integration
async def test_get_video_operation_status_reports_provider_error(mocker):
    mock_get_service = mocker.patch("vertex_mcp.tools.video.get_service")
    mock_get_service.return_value.get_video_operation_status = mocker.AsyncMock(
        side_effect=GenerationError("video", "status", RuntimeError("404 operation not found"))
    )

    result = await get_video_operation_status("operations/missing")

    assert result["success"] is False
    assert result["message"] == "Video status failed: 404 operation not found"


@pytest.mark.integration
async def test_cancel_video_operation_reports_unsupported(mocker):
    mocker.patch("vertex_mcp.generation.GoogleGenAIProvider")

    result = await cancel_video_operation("operations/op-1")

    assert result["success"] is False
    assert "Operation cancellation not yet supported by the API" in result["message"]

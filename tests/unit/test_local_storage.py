# SPDX-License-Identifier: MIT
"""Unit tests for LocalStorageBackend."""

import os
import pathlib

import pytest

from vertex_mcp.storage import get_storage
from vertex_mcp.storage.local import LocalStorageBackend
from vertex_mcp.storage.protocol import StorageBackend

# ------------------------------------------------------------------
# Protocol conformance
# ------------------------------------------------------------------


def test_local_storage_is_storage_backend():
    """LocalStorageBackend satisfies the StorageBackend runtime protocol."""
    backend = LocalStorageBackend(path_overrides={"video": pathlib.Path("/tmp")})
    assert isinstance(backend, StorageBackend)


# ------------------------------------------------------------------
# read
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_read_existing_file(tmp_image_path):
    (tmp_image_path / "frame.png").write_bytes(b"PNG_BYTES")

    backend = LocalStorageBackend(path_overrides={"image": tmp_image_path})
    assert await backend.read("image", "frame.png") == b"PNG_BYTES"


@pytest.mark.unit
async def test_read_nonexistent_file(tmp_image_path):
    backend = LocalStorageBackend(path_overrides={"image": tmp_image_path})
    with pytest.raises(ValueError, match="File not found"):
        await backend.read("image", "nope.png")


@pytest.mark.unit
async def test_read_path_traversal(tmp_image_path):
    backend = LocalStorageBackend(path_overrides={"image": tmp_image_path})
    with pytest.raises(ValueError, match="path traversal"):
        await backend.read("image", "../../etc/passwd")


@pytest.mark.unit
async def test_read_rejects_symlink(tmp_image_path):
    real = tmp_image_path / "real.png"
    real.write_bytes(b"REAL")
    (tmp_image_path / "link.png").symlink_to(real)

    backend = LocalStorageBackend(path_overrides={"image": tmp_image_path})
    with pytest.raises(ValueError, match="symbolic link"):
        await backend.read("image", "link.png")


# ------------------------------------------------------------------
# write
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_write_creates_file(tmp_video_path):
    backend = LocalStorageBackend(path_overrides={"video": tmp_video_path})
    display = await backend.write("video", "out.mp4", b"VIDEO_DATA")

    assert (tmp_video_path / "out.mp4").read_bytes() == b"VIDEO_DATA"
    assert display == str((tmp_video_path / "out.mp4").resolve())


@pytest.mark.unit
async def test_write_path_traversal(tmp_video_path):
    backend = LocalStorageBackend(path_overrides={"video": tmp_video_path})
    with pytest.raises(ValueError, match="path traversal"):
        await backend.write("video", "../escape.mp4", b"BAD")


@pytest.mark.unit
async def test_write_rejects_oversized_payload(tmp_video_path):
    backend = LocalStorageBackend(path_overrides={"video": tmp_video_path}, max_file_size=1024 * 1024)
    with pytest.raises(ValueError, match="larger than the 1 MB limit"):
        await backend.write("video", "big.mp4", b"x" * (1024 * 1024 + 1))
    assert not (tmp_video_path / "big.mp4").exists()


@pytest.mark.unit
async def test_write_size_limit_from_env(monkeypatch, tmp_video_path):
    monkeypatch.setenv("MAX_FILE_SIZE_MB", "1")
    backend = LocalStorageBackend(path_overrides={"video": tmp_video_path})
    assert backend.max_file_size == 1024 * 1024


# ------------------------------------------------------------------
# exists
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_exists(tmp_image_path):
    (tmp_image_path / "img.png").write_bytes(b"X")
    real = tmp_image_path / "real.png"
    real.write_bytes(b"REAL")
    (tmp_image_path / "link.png").symlink_to(real)

    backend = LocalStorageBackend(path_overrides={"image": tmp_image_path})
    assert await backend.exists("image", "img.png") is True
    assert await backend.exists("image", "nope.png") is False
    assert await backend.exists("image", "link.png") is False
    assert await backend.exists("image", "../../etc/passwd") is False


# ------------------------------------------------------------------
# default paths / factory
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_default_paths_from_storage_path(monkeypatch, tmp_path):
    monkeypatch.delenv("IMAGE_PATH", raising=False)
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "generated"))

    backend = LocalStorageBackend()
    await backend.write("image", "a.png", b"A")

    assert (tmp_path / "generated" / "images" / "a.png").read_bytes() == b"A"


@pytest.mark.unit
def test_factory_returns_local_singleton(mocker):
    mocker.patch.dict(os.environ, {"STORAGE_BACKEND": "local"})
    backend = get_storage()
    assert isinstance(backend, LocalStorageBackend)
    assert get_storage() is backend


@pytest.mark.unit
def test_factory_rejects_unknown_backend(mocker):
    mocker.patch.dict(os.environ, {"STORAGE_BACKEND": "s3"})
    with pytest.raises(RuntimeError, match="Unknown STORAGE_BACKEND"):
        get_storage()

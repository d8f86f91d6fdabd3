# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for the Vertex AI MCP server tests."""

import io
import pathlib

import pytest
from PIL import Image

from vertex_mcp.config import get_google_client, get_path
from vertex_mcp.generation import _cached_model_list, get_service
from vertex_mcp.storage import get_storage
from vertex_mcp.types import OperationSnapshot, ResultItem


@pytest.fixture(autouse=True)
def clear_caches():
    """Reset cached clients, paths and services so tests never share state."""
    for cached in (get_path, get_storage, get_service, get_google_client):
        cached.cache_clear()
    _cached_model_list.cache_clear()
    yield
    for cached in (get_path, get_storage, get_service, get_google_client):
        cached.cache_clear()
    _cached_model_list.cache_clear()


@pytest.fixture
def tmp_image_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a temporary directory for images."""
    image_path = tmp_path / "images"
    image_path.mkdir()
    return image_path


@pytest.fixture
def tmp_video_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a temporary directory for videos."""
    video_path = tmp_path / "videos"
    video_path.mkdir()
    return video_path


@pytest.fixture
def png_bytes() -> bytes:
    """A real 64x32 PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color=(255, 0, 0)).save(buf, "PNG")
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A real 32x32 JPEG image."""
    buf = io.BytesIO()
    Image.new("RGB", (32, 32), color=(0, 0, 255)).save(buf, "JPEG")
    return buf.getvalue()


@pytest.fixture
def sample_image(tmp_image_path: pathlib.Path, png_bytes: bytes) -> pathlib.Path:
    """Write a PNG into the image directory and return its path."""
    img_path = tmp_image_path / "frame.png"
    img_path.write_bytes(png_bytes)
    return img_path


# ==================== Fakes ====================


class FakeClock:
    """Monotonic clock advanced only by :meth:`sleep`."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeProvider:
    """In-memory generation provider.

    ``snapshots`` are returned by successive :meth:`refresh` calls; the last
    one repeats once the list runs out.
    """

    def __init__(
        self,
        image_items: list[ResultItem] | None = None,
        initial: OperationSnapshot | None = None,
        snapshots: list[OperationSnapshot] | None = None,
        models: list[str] | None = None,
        clock: FakeClock | None = None,
    ) -> None:
        self.image_items = image_items or []
        self.initial = initial
        self.snapshots = list(snapshots or [])
        self.models = models or []
        self.clock = clock
        self.submitted: list[tuple[str, str, object]] = []
        self.refreshed_at: list[float] = []
        self.list_calls = 0

    async def submit_image(self, model, prompt, options):
        self.submitted.append((model, prompt, options))
        return list(self.image_items)

    async def submit_video(self, model, prompt, options):
        self.submitted.append((model, prompt, options))
        return self.initial

    async def refresh(self, name):
        self.refreshed_at.append(self.clock() if self.clock else 0.0)
        if len(self.snapshots) > 1:
            return self.snapshots.pop(0)
        return self.snapshots[0]

    async def list_models(self):
        self.list_calls += 1
        return list(self.models)

    @property
    def refresh_count(self) -> int:
        return len(self.refreshed_at)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_provider(fake_clock):
    """Factory for :class:`FakeProvider` bound to the shared fake clock."""

    def _make(**kwargs) -> FakeProvider:
        kwargs.setdefault("clock", fake_clock)
        return FakeProvider(**kwargs)

    return _make

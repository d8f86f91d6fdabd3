# SPDX-License-Identifier: MIT
"""Unit tests for utility functions."""

import re
from unittest.mock import patch

import pytest

from vertex_mcp.utils import generate_filename


@pytest.mark.unit
class TestGenerateFilename:
    """Test filename generation logic."""

    def test_basic_filename(self):
        assert generate_filename("abc123", "mp4", use_timestamp=False) == "abc123.mp4"

    @patch("vertex_mcp.utils.time.time", return_value=1234567890.7)
    def test_filename_with_timestamp(self, mock_time):
        result = generate_filename("image", "png")
        assert re.fullmatch(r"image_1234567890_[0-9a-f]{6}\.png", result)

    @patch("vertex_mcp.utils.time.time", return_value=1234567890.0)
    def test_same_second_filenames_differ(self, mock_time):
        names = {generate_filename("video", "mp4") for _ in range(20)}
        assert len(names) == 20

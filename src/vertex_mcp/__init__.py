# SPDX-License-Identifier: MIT
"""MCP server for Google Vertex AI image (Imagen) and video (Veo) generation."""

__version__ = "0.1.0"

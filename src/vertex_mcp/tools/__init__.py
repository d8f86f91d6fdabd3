# SPDX-License-Identifier: MIT
"""MCP tools for Vertex AI image and video generation.

This package contains the FastMCP tool implementations organized by category:
- image: Imagen generation (synchronous)
- video: Veo generation (long-running operation, polled until done)
- estimate: Cost estimates and model listing

The functions here are plain coroutines; :mod:`vertex_mcp.server` registers them.
"""

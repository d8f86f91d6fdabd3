# SPDX-License-Identifier: MIT
"""Configuration management for the Vertex AI MCP server.

This module handles:
- Logging setup
- Google Gen AI client initialization
- Model names and generation defaults
- Path configuration with security checks
"""

import logging
import os
import pathlib
import sys
from functools import lru_cache
from typing import Literal

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,  # Log to stderr to avoid interfering with stdio MCP transport
)
logger = logging.getLogger("vertex_mcp")


def configure_logging(quiet: bool) -> None:
    """Silence or restore the server logger.

    Some stdio MCP clients treat any stderr output as a failure, so the
    transport can ask for complete silence with ``MCP_QUIET=true``.

    Args:
        quiet: When True, drop every record emitted through the ``vertex_mcp`` logger
    """
    logger.disabled = quiet
    if quiet:
        logging.getLogger().setLevel(logging.CRITICAL + 1)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable ("true", "1", "yes" are truthy)."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("true", "1", "yes")


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable.

    Raises:
        RuntimeError: If the variable is set but is not an integer
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {value!r}") from e


# ---------- Google Gen AI client ----------
_CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


def _service_account_credentials():
    """Build service-account credentials from GOOGLE_VERTEX_CLIENT_EMAIL / GOOGLE_VERTEX_PRIVATE_KEY.

    Returns None when either variable is missing, leaving ADC in charge.
    """
    client_email = os.getenv("GOOGLE_VERTEX_CLIENT_EMAIL", "").strip()
    private_key = os.getenv("GOOGLE_VERTEX_PRIVATE_KEY", "").strip()
    if not client_email or not private_key:
        return None

    from google.oauth2 import service_account

    # Keys pasted into .env files usually carry escaped newlines
    info = {
        "client_email": client_email,
        "private_key": private_key.replace("\\n", "\n"),
        "token_uri": "https://oauth2.googleapis.com/token",
    }
    return service_account.Credentials.from_service_account_info(info, scopes=[_CLOUD_PLATFORM_SCOPE])


@lru_cache(maxsize=1)
def get_google_client():
    """Get a Google Gen AI client instance (cached).

    Supports Vertex AI (ADC, service account or Express mode) and the Gemini
    Developer API via env var auto-detection.

    Vertex AI (GOOGLE_GENAI_USE_VERTEXAI=True):
      GOOGLE_CLOUD_PROJECT / GOOGLE_VERTEX_PROJECT_ID   project id
      GOOGLE_CLOUD_LOCATION / GOOGLE_VERTEX_LOCATION    region (default: us-central1)
      GOOGLE_VERTEX_CLIENT_EMAIL + GOOGLE_VERTEX_PRIVATE_KEY   optional service account
      GOOGLE_API_KEY                                     Express mode

    Gemini Developer API (no GOOGLE_GENAI_USE_VERTEXAI):
      GOOGLE_API_KEY

    Returns:
        Configured Google Gen AI Client

    Raises:
        RuntimeError: If required environment variables are not set
    """
    from google import genai

    project = os.getenv("GOOGLE_CLOUD_PROJECT") or os.getenv("GOOGLE_VERTEX_PROJECT_ID")
    api_key = os.getenv("GOOGLE_API_KEY")
    use_vertex = env_flag("GOOGLE_GENAI_USE_VERTEXAI") or bool(os.getenv("GOOGLE_VERTEX_PROJECT_ID"))

    if use_vertex:
        location = os.getenv("GOOGLE_CLOUD_LOCATION") or os.getenv("GOOGLE_VERTEX_LOCATION") or "us-central1"
        if not project and not api_key:
            raise RuntimeError(
                "Vertex AI requires GOOGLE_CLOUD_PROJECT (ADC/service-account auth) "
                "or GOOGLE_API_KEY (Express mode)"
            )

        kwargs: dict[str, object] = {"vertexai": True, "location": location}
        if project:
            kwargs["project"] = project
        credentials = _service_account_credentials()
        if credentials is not None:
            kwargs["credentials"] = credentials
        elif api_key:
            kwargs["api_key"] = api_key
        logger.debug("Creating Vertex AI client (project=%s, location=%s)", project, location)
        return genai.Client(**kwargs)

    if not api_key:
        raise RuntimeError(
            "Google credentials not configured. "
            "Set GOOGLE_GENAI_USE_VERTEXAI=True + GOOGLE_CLOUD_PROJECT (Vertex AI) "
            "or GOOGLE_API_KEY (Gemini Developer API)"
        )
    return genai.Client(api_key=api_key)


# ---------- Models and generation defaults ----------
def get_image_model() -> str:
    return os.getenv("VERTEX_AI_IMAGE_MODEL", "imagen-4.0-generate-001")


def get_video_model() -> str:
    return os.getenv("VERTEX_AI_VIDEO_MODEL", "veo-3.0-generate-001")


def get_generation_defaults() -> dict[str, str]:
    """Server-wide defaults applied to image requests that leave these fields unset."""
    return {
        "safety_filter_level": os.getenv("SAFETY_FILTER_LEVEL", "BLOCK_MEDIUM_AND_ABOVE"),
        "person_generation": os.getenv("PERSON_GENERATION", "ALLOW_ADULT"),
    }


def get_max_file_size_bytes() -> int:
    return env_int("MAX_FILE_SIZE_MB", 100) * 1024 * 1024


# ---------- Path configuration (runtime) ----------

# Mapping from path_type to (individual env var, subdirectory under STORAGE_PATH)
_MEDIA_SUBDIRS: dict[str, tuple[str, str]] = {
    "video": ("VIDEO_PATH", "videos"),
    "image": ("IMAGE_PATH", "images"),
}

_ERROR_NAMES: dict[str, str] = {
    "video": "Video output directory",
    "image": "Image output directory",
}

_DEFAULT_STORAGE_PATH = "./generated"


def _resolve_media_path(path_type: Literal["video", "image"]) -> tuple[str, str, bool]:
    """Resolve path string from individual env var or STORAGE_PATH.

    Priority: individual env var > STORAGE_PATH/{subdir} > ./generated/{subdir}.

    Returns:
        (path_str, env_var_name_for_errors, using_unified) tuple
    """
    env_var, subdir = _MEDIA_SUBDIRS[path_type]

    individual = os.getenv(env_var)
    if individual and individual.strip():
        return individual.strip(), env_var, False

    unified = os.getenv("STORAGE_PATH", "").strip() or _DEFAULT_STORAGE_PATH
    return os.path.join(unified, subdir), "STORAGE_PATH", True


@lru_cache(maxsize=2)
def get_path(path_type: Literal["video", "image"]) -> pathlib.Path:
    """Get and validate a configured output path from environment.

    Supports two configuration modes:
    1. Individual env vars: VIDEO_PATH, IMAGE_PATH (take precedence)
    2. Unified root: STORAGE_PATH (default ./generated; videos/ and images/ are auto-created)

    Security: Rejects symlinks in environment variable paths.

    Args:
        path_type: "video" for VIDEO_PATH or "image" for IMAGE_PATH

    Returns:
        Validated absolute path

    Raises:
        RuntimeError: If the path is malformed, missing, not a directory, or a symlink
    """
    error_name = _ERROR_NAMES[path_type]
    path_str, env_var, using_unified = _resolve_media_path(path_type)

    try:
        path = pathlib.Path(path_str).resolve()
    except (ValueError, OSError) as e:
        raise RuntimeError(f"Invalid {error_name} path '{path_str}': {e}") from e

    original_path = pathlib.Path(path_str)
    try:
        if original_path.exists() and original_path.is_symlink():
            raise RuntimeError(f"{error_name} cannot be a symbolic link: {path_str}")
    except PermissionError as e:
        raise RuntimeError(f"Cannot validate {error_name}: permission denied for {path_str}") from e

    if using_unified and not path.exists():
        try:
            path.mkdir(parents=True, exist_ok=True)
            logger.info("Auto-created directory: %s", path)
        except OSError as e:
            raise RuntimeError(f"Failed to auto-create {error_name} at {path}: {e}") from e

    if not path.exists():
        raise RuntimeError(f"{env_var}: {error_name} does not exist: {path}")
    if not path.is_dir():
        raise RuntimeError(f"{env_var}: {error_name} is not a directory: {path}")

    return path

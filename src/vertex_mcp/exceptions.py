# SPDX-License-Identifier: MIT
"""Exception hierarchy for image and video generation.

Every error raised by the generation core derives from :class:`VertexMCPError`.
The tool layer catches :class:`GenerationError` and turns it into a
structured failure response instead of letting it reach the transport.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Literal

GenerationKind = Literal["image", "video"]
GenerationStage = Literal["validation", "submission", "tracking", "normalization", "status", "cancellation"]


class VideoJobState(enum.Enum):
    """Lifecycle of a tracked video operation.

    ``SUBMITTED`` moves to ``POLLING`` unless the operation is already done.
    The four remaining states are terminal.
    """

    SUBMITTED = "submitted"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    PROVIDER_FAILED = "provider_failed"
    LOST_HANDLE = "lost_handle"

    @property
    def is_terminal(self) -> bool:
        return self not in (VideoJobState.SUBMITTED, VideoJobState.POLLING)


class VertexMCPError(Exception):
    """Base class for all generation errors."""


# ---------- Validation ----------


class ValidationError(VertexMCPError, ValueError):
    """Caller-supplied prompt or option outside its valid range."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


# ---------- Tracking ----------


class TrackerError(VertexMCPError):
    """A video operation ended without a usable result."""

    state: VideoJobState = VideoJobState.PROVIDER_FAILED

    def __init__(self, message: str, operation_name: str | None = None) -> None:
        super().__init__(message)
        self.operation_name = operation_name


class OperationTimeoutError(TrackerError):
    state = VideoJobState.TIMED_OUT

    def __init__(self, timeout: float, operation_name: str | None = None) -> None:
        minutes = timeout / 60
        label = f"{minutes:g} minutes" if timeout >= 60 else f"{timeout:g} seconds"
        super().__init__(f"Video generation timed out after {label}", operation_name)
        self.timeout = timeout


class ProviderOperationError(TrackerError):
    """The provider finished the operation with its error field populated."""

    state = VideoJobState.PROVIDER_FAILED

    def __init__(self, details: Any, operation_name: str | None = None) -> None:
        super().__init__(f"Provider reported an error: {_dump(details)}", operation_name)
        self.details = details


class EmptyResultError(TrackerError):
    state = VideoJobState.PROVIDER_FAILED

    def __init__(self, operation_name: str | None = None) -> None:
        super().__init__("No videos were generated", operation_name)


class LostHandleError(TrackerError):
    state = VideoJobState.LOST_HANDLE

    def __init__(self) -> None:
        super().__init__("Operation name is not available for polling")


# ---------- Normalization ----------


class NormalizeError(VertexMCPError):
    """A result payload could not be turned into raw bytes."""


class DecodeFailureError(NormalizeError):
    pass


class RemoteFetchUnsupportedError(NormalizeError):
    def __init__(self, uri: str) -> None:
        super().__init__(f"Remote download not implemented. Cannot download from {uri}")
        self.uri = uri


class NoValidArtifactsError(NormalizeError):
    def __init__(self, kind: str = "media") -> None:
        super().__init__(f"No valid {kind} data was found in the response")


# ---------- Misc ----------


class OperationUnsupportedError(VertexMCPError):
    """The provider offers no way to perform the requested operation."""


class GenerationError(VertexMCPError):
    """Envelope for any failure inside a generation call.

    Attributes:
        kind: "image" or "video"
        stage: Pipeline stage where the failure happened
        cause: The original exception (also chained as ``__cause__``)
    """

    def __init__(self, kind: GenerationKind, stage: GenerationStage, cause: BaseException) -> None:
        super().__init__(f"{kind.capitalize()} {stage} failed: {cause}")
        self.kind = kind
        self.stage = stage
        self.cause = cause


def _dump(details: Any) -> str:
    try:
        return json.dumps(details, default=str, sort_keys=True)
    except (TypeError, ValueError):
        return str(details)

# SPDX-License-Identifier: MIT
"""Turn provider result items into raw artifact bytes.

A result item carries either inline data or a remote-storage locator. Inline
data is decoded here; remote locators go through a :class:`RemoteObjectFetcher`.
No fetcher for Cloud Storage is wired in yet, so the default one declares the
path unsupported and the item is skipped.
"""

import base64
import binascii
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .config import logger
from .exceptions import DecodeFailureError, NoValidArtifactsError, NormalizeError, RemoteFetchUnsupportedError
from .types import ResultItem


@runtime_checkable
class RemoteObjectFetcher(Protocol):
    """Downloads an object referenced by a remote locator (e.g. ``gs://bucket/key``)."""

    async def fetch(self, uri: str) -> bytes: ...


class UnsupportedRemoteFetcher:
    """Fetcher used until a real object-store client is integrated."""

    async def fetch(self, uri: str) -> bytes:
        raise RemoteFetchUnsupportedError(uri)


def decode_inline(data: bytes | str) -> bytes:
    """Decode inline item data.

    ``bytes`` are already raw (the SDK decodes base64 for us) and are copied
    as-is; ``str`` is treated as strict base64.

    Raises:
        DecodeFailureError: If the text is not valid base64
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeFailureError(f"Inline data is not valid base64: {e}") from e


async def normalize_item(item: ResultItem, fetcher: RemoteObjectFetcher | None = None) -> bytes | None:
    """Normalize a single result item.

    Returns:
        Raw bytes, or None for a malformed item with neither field populated

    Raises:
        DecodeFailureError: Inline data could not be decoded
        RemoteFetchUnsupportedError: Only a remote locator is available and it cannot be fetched
    """
    if item.inline_bytes:
        return decode_inline(item.inline_bytes)
    if item.remote_uri:
        return await (fetcher or UnsupportedRemoteFetcher()).fetch(item.remote_uri)
    return None


async def normalize_results(
    items: Sequence[ResultItem],
    kind: str = "media",
    fetcher: RemoteObjectFetcher | None = None,
) -> list[bytes]:
    """Normalize every item of a result set, preserving order.

    Items that are malformed or fail to normalize are logged and skipped.

    Raises:
        NoValidArtifactsError: If no item produced an artifact
    """
    artifacts: list[bytes] = []
    for index, item in enumerate(items):
        try:
            data = await normalize_item(item, fetcher)
        except NormalizeError as e:
            logger.warning("Skipping %s %d: %s", kind, index + 1, e)
            continue
        if data is None:
            logger.warning("Skipping %s %d with no data available", kind, index + 1)
            continue
        artifacts.append(data)

    if not artifacts:
        raise NoValidArtifactsError(kind)
    return artifacts

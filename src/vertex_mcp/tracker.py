# SPDX-License-Identifier: MIT
"""Polling tracker for long-running video operations.

Veo returns an operation handle instead of a result. The tracker sleeps a
fixed interval, refreshes the operation by name, and repeats until the
provider reports ``done`` or the wall-clock ceiling is reached.
"""

import time
from collections.abc import Awaitable, Callable

import anyio

from .config import logger
from .exceptions import (
    EmptyResultError,
    LostHandleError,
    OperationTimeoutError,
    ProviderOperationError,
    VideoJobState,
)
from .types import OperationSnapshot, ResultItem

POLL_INTERVAL_SECONDS = 15.0
TIMEOUT_SECONDS = 600.0

RefreshFunc = Callable[[str], Awaitable[OperationSnapshot]]


class OperationTracker:
    """Drives an :class:`OperationSnapshot` to a terminal state.

    The tracker holds configuration only. Every :meth:`wait` call owns its
    snapshot, so one tracker can serve any number of concurrent operations.

    Args:
        refresh: Coroutine returning a fresh snapshot for an operation name
        poll_interval: Seconds to sleep before each refresh
        timeout: Ceiling in seconds, measured from entry into the poll loop
        sleep: Async sleep function (injectable for tests)
        clock: Monotonic clock (injectable for tests)
    """

    def __init__(
        self,
        refresh: RefreshFunc,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        timeout: float = TIMEOUT_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = anyio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._refresh = refresh
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock

    async def poll(self, operation: OperationSnapshot) -> OperationSnapshot:
        """Poll until the operation is done or carries a provider error.

        Returns:
            The final snapshot (``done`` is True or ``error`` is set)

        Raises:
            OperationTimeoutError: The ceiling elapsed before the provider finished
            LostHandleError: The snapshot has no name to refresh with
        """
        if operation.done or operation.error:
            return operation

        logger.info("Polling operation %s (%s)", operation.name, VideoJobState.POLLING.value)
        started = self._clock()
        refreshes = 0
        while not (operation.done or operation.error):
            if not operation.name:
                raise LostHandleError()

            await self._sleep(self.poll_interval)

            if self._clock() - started > self.timeout:
                logger.warning(
                    "Operation %s timed out after %d refreshes (%s)",
                    operation.name,
                    refreshes,
                    VideoJobState.TIMED_OUT.value,
                )
                raise OperationTimeoutError(self.timeout, operation.name)

            operation = await self._refresh(operation.name)
            refreshes += 1
            if operation.metadata:
                logger.info("Video generation progress: %s", operation.metadata)

        logger.debug("Operation %s done after %d refreshes", operation.name, refreshes)
        return operation

    async def wait(self, operation: OperationSnapshot) -> list[ResultItem]:
        """Track an operation to completion and return its result set.

        Raises:
            OperationTimeoutError: See :meth:`poll`
            LostHandleError: See :meth:`poll`
            ProviderOperationError: The finished operation carries an error
            EmptyResultError: The finished operation has no results
        """
        operation = await self.poll(operation)

        if operation.error:
            raise ProviderOperationError(operation.error, operation.name)
        if not operation.results:
            raise EmptyResultError(operation.name)

        logger.info(
            "Operation %s finished with %d result(s) (%s)",
            operation.name,
            len(operation.results),
            VideoJobState.SUCCEEDED.value,
        )
        return list(operation.results)

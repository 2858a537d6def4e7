"""Connection state tracking for remote backends."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """State of a remote backend connection."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class ConnectionMonitor:
    """Two-state machine driven by transport failures and health probes.

    A reported connection failure moves the monitor to DISCONNECTED and
    starts a background task that runs ``probe`` every ``interval``
    seconds. The first probe that succeeds moves it back to CONNECTED.
    The state is read synchronously by every cache operation.
    """

    def __init__(
        self,
        probe: Callable[[], Awaitable[Any]],
        interval: float = 5.0,
        probe_errors: tuple[type[BaseException], ...] = (Exception,),
    ) -> None:
        """Initialize the monitor in the CONNECTED state.

        Args:
            probe: Coroutine function checking connectivity; raises on failure.
            interval: Seconds between probes while disconnected.
            probe_errors: Exceptions that mean the probe failed.
        """
        self._probe = probe
        self._interval = interval
        self._probe_errors = probe_errors
        self._state = ConnectionState.CONNECTED
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> ConnectionState:
        """Return the current connection state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Return True while the connection is considered healthy."""
        return self._state is ConnectionState.CONNECTED

    def mark_connected(self) -> None:
        """Transition to CONNECTED."""
        if self._state is ConnectionState.CONNECTED:
            return
        self._state = ConnectionState.CONNECTED
        logger.info("Cache backend connection restored, cache re-enabled")

    def mark_disconnected(self, error: BaseException | None = None) -> None:
        """Transition to DISCONNECTED and start probing for recovery.

        Args:
            error: The transport error that caused the transition.
        """
        if self._state is ConnectionState.DISCONNECTED:
            return
        self._state = ConnectionState.DISCONNECTED
        logger.warning(
            "Cache backend connection lost, cache disabled until it recovers: %s",
            error,
        )
        self._start_probe()

    def _start_probe(self) -> None:
        if self._task is not None and not self._task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, recovery probe not started")
            return
        self._task = loop.create_task(self._probe_until_connected())

    async def _probe_until_connected(self) -> None:
        while self._state is ConnectionState.DISCONNECTED:
            await asyncio.sleep(self._interval)
            try:
                await self._probe()
            except self._probe_errors as e:
                logger.debug("Cache backend still unreachable: %s", e)
                continue
            except Exception:
                logger.warning(
                    "Cache backend health check failed unexpectedly", exc_info=True
                )
                continue
            self.mark_connected()

    async def close(self) -> None:
        """Stop the recovery probe if it is running."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

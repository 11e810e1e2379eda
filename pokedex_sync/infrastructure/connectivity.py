"""Connectivity monitor.

Produces the "connectivity restored" signal by polling the source API
and notifying subscribers when reachability goes from absent to present.
"""

import asyncio
from typing import Awaitable, Callable

import structlog

logger = structlog.get_logger()

Listener = Callable[[], None]
Probe = Callable[[], Awaitable[bool]]


class ConnectivityMonitor:
    """Polls a reachability probe and raises a restored signal.

    Listeners are plain callables invoked on the event loop thread. A
    listener is called once per absent-to-present transition for as long
    as it stays subscribed.
    """

    def __init__(self, probe: Probe, interval: float = 5.0) -> None:
        """Initialize monitor.

        Args:
            probe: Async callable returning True when the network is reachable.
            interval: Seconds between probes.
        """
        self._probe = probe
        self.interval = interval
        self._listeners: list[Listener] = []
        self._reachable: bool | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def reachable(self) -> bool | None:
        """Last known reachability, None before the first probe."""
        return self._reachable

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a restored-signal listener.

        Args:
            listener: Callable invoked when connectivity is restored.

        Returns:
            Callable that detaches the listener. Safe to call twice.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def report_unreachable(self) -> None:
        """Mark the network as absent, e.g. after a failed request."""
        self._reachable = False

    def notify_restored(self) -> None:
        """Raise the restored signal to every current listener."""
        self._reachable = True
        logger.info("Connectivity restored", listener_count=len(self._listeners))
        for listener in list(self._listeners):
            listener()

    async def check(self) -> bool:
        """Run the probe once and raise the signal on a restore.

        Returns:
            Probe result.
        """
        reachable = await self._probe()
        if reachable and self._reachable is False:
            self.notify_restored()
        elif not reachable and self._reachable is not False:
            logger.warning("Connectivity lost")
            self._reachable = False
        else:
            self._reachable = reachable
        return reachable

    async def _run(self) -> None:
        while True:
            await self.check()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start background polling."""
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop background polling and drop all listeners."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._listeners.clear()

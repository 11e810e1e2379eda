"""Catalog sync controller.

Owns the catalog snapshot, the filter criteria and the sync state, and
drives BulkLoader over time: once on startup, on manual reload, and on
every retry trigger while degraded.

Retry triggers (a fixed-interval timer and the connectivity-restored
signal) are acquired when entering DEGRADED and released on every path
out of it. Overlapping triggers coalesce onto the single in-flight
attempt.
"""

import asyncio
from typing import Callable, Protocol

import structlog

from pokedex_sync.catalog.filters import evaluate
from pokedex_sync.domain.exceptions import IndexFetchFailedError
from pokedex_sync.domain.models import CatalogRecord, CatalogSnapshot, FilterCriteria
from pokedex_sync.domain.state_machines import (
    SyncState,
    SyncStatus,
    validate_sync_transition,
)
from pokedex_sync.infrastructure.connectivity import ConnectivityMonitor

logger = structlog.get_logger()


class CatalogLoader(Protocol):
    """Anything that can produce a full catalog snapshot."""

    async def load(self, limit: int) -> CatalogSnapshot: ...


class SyncController:
    """Keeps the in-memory catalog in sync with the source API.

    Example usage:
        controller = SyncController(loader, limit=999, retry_interval=5.0)
        await controller.start()
        controller.set_criteria(FilterCriteria(search_text="pika"))
        results = controller.get_filtered()
        await controller.stop()
    """

    def __init__(
        self,
        loader: CatalogLoader,
        limit: int = 999,
        retry_interval: float = 5.0,
        connectivity: ConnectivityMonitor | None = None,
        max_attempts: int | None = None,
    ) -> None:
        """Initialize controller in the LOADING state.

        Args:
            loader: Catalog loader.
            limit: Index page-size limit passed to every load.
            retry_interval: Seconds between scheduled retries while degraded.
            connectivity: Source of the connectivity-restored signal.
            max_attempts: Release retry triggers after this many failures.
        """
        self._loader = loader
        self.limit = limit
        self.retry_interval = retry_interval
        self._connectivity = connectivity
        self.max_attempts = max_attempts

        self._state = SyncState.loading()
        self._snapshot = CatalogSnapshot.empty()
        self._criteria = FilterCriteria()

        self._attempt_task: asyncio.Task[None] | None = None
        self._retry_task: asyncio.Task[None] | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._started = False
        self._stopped = False

    # ------------------------------------------------------------------
    # Reader interface
    # ------------------------------------------------------------------

    def get_sync_state(self) -> SyncState:
        return self._state

    def get_catalog(self) -> tuple[CatalogRecord, ...]:
        """Current records. Empty until the first successful load."""
        return self._snapshot.records

    def get_category_catalog(self) -> frozenset[str]:
        return self._snapshot.categories

    def get_criteria(self) -> FilterCriteria:
        return self._criteria

    def set_criteria(self, criteria: FilterCriteria) -> None:
        """Replace filter criteria. Triggers no network activity."""
        self._criteria = criteria

    def get_filtered(self) -> list[CatalogRecord]:
        """Evaluate the current criteria against the current catalog."""
        return evaluate(self._snapshot.records, self._criteria)

    @property
    def attempt_in_flight(self) -> bool:
        return self._attempt_task is not None and not self._attempt_task.done()

    @property
    def retries_active(self) -> bool:
        """True while the retry timer or connectivity listener is held."""
        return self._retry_task is not None or self._unsubscribe is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task[None] | None:
        """Run the initial load.

        Returns:
            The load attempt task, or None once the controller is stopped.
        """
        if not self._started:
            self._started = True
            logger.info("Starting catalog sync", limit=self.limit)
        return self._schedule_attempt("startup")

    def request_reload(self) -> asyncio.Task[None] | None:
        """Manually reload the catalog.

        From READY this re-enters LOADING. While degraded it retries
        immediately without changing state. While an attempt is already
        running it returns that attempt.

        Returns:
            The load attempt task, or None once the controller is stopped.
        """
        if self._stopped:
            logger.debug("Ignoring reload after stop")
            return None
        if self._state.status is SyncStatus.READY:
            self._transition(SyncState.loading())
        return self._schedule_attempt("manual")

    async def stop(self) -> None:
        """Release retry triggers and wait for any running attempt."""
        self._stopped = True
        retry_task = self._retry_task
        self._exit_degraded()
        if retry_task is not None:
            try:
                await retry_task
            except asyncio.CancelledError:
                pass
        if self._attempt_task is not None:
            await asyncio.gather(self._attempt_task, return_exceptions=True)
        logger.info("Catalog sync stopped", status=self._state.status.value)

    # ------------------------------------------------------------------
    # Attempts
    # ------------------------------------------------------------------

    def _schedule_attempt(self, trigger: str) -> asyncio.Task[None] | None:
        if self._stopped:
            logger.debug("Controller stopped, not scheduling attempt", trigger=trigger)
            return None
        if self._attempt_task is not None and not self._attempt_task.done():
            logger.debug("Load attempt already in flight", trigger=trigger)
            return self._attempt_task
        logger.info("Starting load attempt", trigger=trigger, status=self._state.status.value)
        self._attempt_task = asyncio.create_task(self._run_attempt())
        return self._attempt_task

    async def _run_attempt(self) -> None:
        try:
            snapshot = await self._loader.load(self.limit)
        except IndexFetchFailedError as e:
            self._on_load_failed(e.message)
        except Exception as e:
            logger.exception("Unexpected error during catalog load", error=str(e))
            self._on_load_failed(f"Unexpected error: {e!r}")
        else:
            self._on_load_succeeded(snapshot)

    def _on_load_succeeded(self, snapshot: CatalogSnapshot) -> None:
        self._snapshot = snapshot
        if self._state.status.is_retrying():
            self._exit_degraded()
        self._transition(SyncState.ready())
        logger.info(
            "Catalog sync ready",
            record_count=len(snapshot),
            category_count=len(snapshot.categories),
        )

    def _on_load_failed(self, message: str) -> None:
        if self._connectivity is not None:
            self._connectivity.report_unreachable()

        entering = not self._state.status.is_retrying()
        attempt = self._state.attempt + 1
        self._transition(SyncState.degraded(attempt, message))
        logger.warning(
            "Catalog sync degraded",
            attempt=attempt,
            error=message,
            retry_interval=self.retry_interval,
        )

        if self.max_attempts is not None and attempt >= self.max_attempts:
            logger.error("Retry limit reached", attempt=attempt)
            self._exit_degraded()
        elif entering and not self._stopped:
            self._enter_degraded()

    def _transition(self, target: SyncState) -> None:
        validate_sync_transition(self._state.status, target.status)
        self._state = target

    # ------------------------------------------------------------------
    # DEGRADED enter/exit hooks
    # ------------------------------------------------------------------

    def _enter_degraded(self) -> None:
        if self._retry_task is None:
            self._retry_task = asyncio.create_task(self._retry_loop())
        if self._connectivity is not None and self._unsubscribe is None:
            self._unsubscribe = self._connectivity.subscribe(self._on_connectivity_restored)

    def _exit_degraded(self) -> None:
        if self._retry_task is not None:
            self._retry_task.cancel()
            self._retry_task = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _retry_loop(self) -> None:
        while True:
            await asyncio.sleep(self.retry_interval)
            self._schedule_attempt("timer")

    def _on_connectivity_restored(self) -> None:
        self._schedule_attempt("connectivity")

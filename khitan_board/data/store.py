"""
RefreshController — owns the fetch → parse → build cycle and its status.

Created at startup, driven by a timer and by manual requests, disposed on
shutdown. Consumers read snapshot() or subscribe() to status changes.
"""
from __future__ import annotations

import asyncio
import datetime as dt
from typing import Awaitable, Callable, Optional

from khitan_board.config import SHEET_CSV_URL, FETCH_TIMEOUT_SECONDS, REFRESH_INTERVAL_SECONDS
from khitan_board.data.errors import SheetSourceError
from khitan_board.data.loader import fetch_sheet_csv, parse_registrants
from khitan_board.data.schemas import (
    FetchStatus, Loading, Success, Failure, Registrant, RefreshSnapshot,
)

Fetcher = Callable[[], Awaitable[str]]
Listener = Callable[[FetchStatus], None]


def http_fetcher(url: str = SHEET_CSV_URL, timeout: float = FETCH_TIMEOUT_SECONDS) -> Fetcher:
    """Async fetcher running the blocking download in a worker thread."""
    async def fetch() -> str:
        return await asyncio.to_thread(fetch_sheet_csv, url, timeout)
    return fetch


class RefreshController:
    """Loading → {Success, Failure} → Loading → … with at most one fetch in flight."""

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        interval: float = REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self._fetcher = fetcher or http_fetcher()
        self._interval = interval
        self._clock = clock

        self._status: FetchStatus = Loading()
        self._registrants: tuple[Registrant, ...] = ()
        self._last_updated: Optional[dt.datetime] = None

        self._listeners: list[Listener] = []
        self._inflight: Optional[asyncio.Task] = None
        self._timer: Optional[asyncio.Task] = None
        self._disposed = False
        self.fetch_count = 0

    # ------------------------------------------------------------------
    # Status projection
    # ------------------------------------------------------------------

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def registrants(self) -> tuple[Registrant, ...]:
        """Last successful record sequence; a failed cycle does not clear it."""
        return self._registrants

    @property
    def is_refreshing(self) -> bool:
        return self._inflight is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def snapshot(self) -> RefreshSnapshot:
        return RefreshSnapshot(
            loading=isinstance(self._status, Loading),
            error=self._status.message if isinstance(self._status, Failure) else None,
            registrants=self._registrants,
            last_updated=self._last_updated,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener(status) on every transition. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_status(self, status: FetchStatus) -> None:
        self._status = status
        for listener in list(self._listeners):
            # Subscribers never break the cycle or the timer
            try:
                listener(status)
            except Exception as exc:
                print(f"  Status listener failed: {type(exc).__name__}: {exc}")

    # ------------------------------------------------------------------
    # Fetch cycle
    # ------------------------------------------------------------------

    async def refresh(self) -> FetchStatus:
        """Run a fetch cycle, or join the one already in flight.

        A request arriving mid-cycle starts nothing new; it resolves with
        that cycle's outcome.
        """
        if self._disposed:
            return self._status
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._run_cycle())
        return await asyncio.shield(self._inflight)

    async def _run_cycle(self) -> FetchStatus:
        self.fetch_count += 1
        try:
            self._set_status(Loading())
            text = await self._fetcher()
            registrants = parse_registrants(text)
        except SheetSourceError as exc:
            print(f"  Refresh failed: {exc}")
            outcome: FetchStatus = Failure(str(exc), self._clock())
        except Exception as exc:
            print(f"  Refresh failed unexpectedly: {type(exc).__name__}: {exc}")
            outcome = Failure(str(exc) or type(exc).__name__, self._clock())
        else:
            outcome = Success(tuple(registrants), self._clock())
        finally:
            self._inflight = None

        if self._disposed:
            return self._status

        if isinstance(outcome, Success):
            # Swap the whole sequence at once; readers never see a partial list
            self._registrants = outcome.registrants
            print(f"  Refreshed — {len(outcome.registrants):,} registrants")
        self._last_updated = outcome.timestamp
        self._set_status(outcome)
        return outcome

    # ------------------------------------------------------------------
    # Timer lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin polling: fetch now, then every `interval` seconds."""
        if self._disposed:
            raise RuntimeError("RefreshController has been disposed")
        if self._timer is None:
            self._timer = asyncio.ensure_future(self._poll())

    async def _poll(self) -> None:
        """Fixed-rate ticks: the period does not stretch by the fetch duration."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while not self._disposed:
            await self.refresh()
            next_tick += self._interval
            now = loop.time()
            if next_tick < now:
                # Fetch overran a whole period; skip the missed ticks
                next_tick = now
            await asyncio.sleep(next_tick - now)

    def dispose(self) -> None:
        """Cancel the timer and any in-flight fetch. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        for task in (self._timer, self._inflight):
            if task is not None and not task.done():
                task.cancel()
        self._listeners.clear()

    async def aclose(self) -> None:
        tasks = [t for t in (self._timer, self._inflight) if t is not None]
        self.dispose()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._timer = None
        self._inflight = None

    async def __aenter__(self) -> "RefreshController":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

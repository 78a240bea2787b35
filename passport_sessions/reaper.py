# passport_sessions/reaper.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .exceptions import BackendError
from .store import SessionStore

log = logging.getLogger("passport_sessions.reaper")


class ExpiredSessionReaper:
    """
    Periodically purges expired session records.

    Optional: reads already treat expired records as absent, this only keeps
    the collection from accumulating sessions nobody comes back for.
    """

    def __init__(self, store: SessionStore, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._store = store
        self._interval = interval_seconds
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        try:
            removed = await self._store.purge_expired()
        except BackendError as e:
            log.exception("Purging expired sessions from %s failed: %s", self._store.collection, e)
            return 0
        if removed:
            log.info("Purged %d expired session(s) from %s", removed, self._store.collection)
        return removed

    async def run(self) -> None:
        """Loop until :meth:`stop` is called."""
        log.info("Session reaper started interval=%ss collection=%s", self._interval, self._store.collection)
        while not self._stop_event.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                continue
        log.info("Session reaper stopped")

    def start(self) -> asyncio.Task:
        if self.running:
            raise RuntimeError("reaper already running")
        self._stop_event.clear()
        self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is not None:
            await self._task
            self._task = None

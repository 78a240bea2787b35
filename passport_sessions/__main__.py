# passport_sessions/__main__.py
"""Run the expired-session reaper against the configured MongoDB collection."""
from __future__ import annotations

import asyncio
import logging

from .config import settings
from .db.mongodb import close_db, get_db
from .logging_conf import setup_logging
from .reaper import ExpiredSessionReaper
from .store import SessionStore

log = logging.getLogger("passport_sessions")


async def main() -> None:
    db = await get_db()
    store = SessionStore.from_connection(db, settings.COLLECTION)
    try:
        if settings.ENSURE_TTL_INDEX:
            await store.ensure_indexes()
            log.info("TTL index ensured on %s.expiry", settings.COLLECTION)

        if settings.REAPER_INTERVAL_SECONDS <= 0:
            removed = await store.purge_expired()
            log.info("Purged %d expired session(s) from %s", removed, settings.COLLECTION)
            return

        await ExpiredSessionReaper(store, settings.REAPER_INTERVAL_SECONDS).run()
    finally:
        await close_db()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())

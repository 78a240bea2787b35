from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import pytest

from passport_sessions.dal.memory import InMemoryDocumentStore
from passport_sessions.dates import ExpiryCalculator
from passport_sessions.exceptions import BackendError
from passport_sessions.keys import ALPHABET, KEY_LENGTH
from passport_sessions.store import SessionStore

COLLECTION = "sessions"


def is_well_formed(key: str) -> bool:
    return len(key) == KEY_LENGTH and all(c in ALPHABET for c in key)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


class FlakyDocumentStore(InMemoryDocumentStore):
    """In-memory backend whose operations can be made to fail one by one."""

    def __init__(self) -> None:
        super().__init__()
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, op: str, doc_id: str) -> None:
        self.calls.append((op, doc_id))
        if op in self.failing:
            raise BackendError(f"{op} unavailable")

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        self._check("get", doc_id)
        return await super().get(collection, doc_id)

    async def create(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        self._check("create", doc_id)
        await super().create(collection, doc_id, fields)

    async def merge(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        self._check("merge", doc_id)
        return await super().merge(collection, doc_id, fields)

    async def delete(self, collection: str, doc_id: str) -> bool:
        self._check("delete", doc_id)
        return await super().delete(collection, doc_id)

    async def delete_expired(self, collection: str, field: str, before: datetime) -> int:
        self._check("delete_expired", collection)
        return await super().delete_expired(collection, field, before)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def backend() -> FlakyDocumentStore:
    return FlakyDocumentStore()


@pytest.fixture
def store(backend: FlakyDocumentStore, clock: FakeClock) -> SessionStore:
    return SessionStore(backend, COLLECTION, expiry=ExpiryCalculator(clock))

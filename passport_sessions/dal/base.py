# passport_sessions/dal/base.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """
    Keyed document CRUD consumed by the session store.

    Implementations raise :class:`~passport_sessions.exceptions.BackendError`
    (or a subclass) on failure.
    """

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]: ...

    async def create(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None: ...

    async def merge(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Set only ``fields`` on an existing document; raises ``RecordNotFound`` if absent."""
        ...

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Remove a document. Returns whether one existed; never fails on absence."""
        ...

    async def delete_expired(self, collection: str, field: str, before: datetime) -> int: ...

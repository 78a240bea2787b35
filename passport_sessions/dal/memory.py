from __future__ import annotations

import copy
from datetime import datetime
from typing import Any, Dict, Optional

from ..dates import timestamp_millis
from ..exceptions import BackendError, RecordNotFound


class InMemoryDocumentStore:
    """
    Simple store for dev/single-instance and tests.
    Replace with MongoDocumentStore for production HA.
    """

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _col(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._col(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def create(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        col = self._col(collection)
        if doc_id in col:
            raise BackendError(f"Duplicate id {doc_id!r} in {collection!r}")
        doc = copy.deepcopy(fields)
        doc["_id"] = doc_id
        col[doc_id] = doc

    async def merge(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        doc = self._col(collection).get(doc_id)
        if doc is None:
            raise RecordNotFound(f"No record {doc_id!r} in {collection!r}")
        doc.update({k: copy.deepcopy(v) for k, v in fields.items() if k != "_id"})
        return copy.deepcopy(doc)

    async def delete(self, collection: str, doc_id: str) -> bool:
        return self._col(collection).pop(doc_id, None) is not None

    async def delete_expired(self, collection: str, field: str, before: datetime) -> int:
        col = self._col(collection)
        cutoff = timestamp_millis(before)
        stale = [
            k for k, d in col.items()
            if isinstance(d.get(field), datetime) and timestamp_millis(d[field]) < cutoff
        ]
        for k in stale:
            del col[k]
        return len(stale)

    def __len__(self) -> int:
        return sum(len(c) for c in self._collections.values())

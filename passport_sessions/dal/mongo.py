# passport_sessions/dal/mongo.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..exceptions import BackendError, RecordNotFound

log = logging.getLogger("passport_sessions.dal.mongo")


class MongoDocumentStore:
    """Document CRUD over an already connected Motor database handle."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def ensure_ttl_index(self, collection: str, field: str) -> None:
        """Let MongoDB's TTL monitor remove documents once ``field`` has passed."""
        try:
            await self.db[collection].create_index([(field, ASCENDING)], expireAfterSeconds=0)
        except PyMongoError as e:
            raise BackendError(f"Failed to create TTL index on {collection}.{field}: {e}") from e

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.db[collection].find_one({"_id": doc_id})
        except PyMongoError as e:
            raise BackendError(f"Reading database record failed: {e}") from e

    async def create(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        doc = {**fields, "_id": doc_id}
        try:
            await self.db[collection].insert_one(doc)
        except DuplicateKeyError as e:
            raise BackendError(f"Record {doc_id!r} already exists") from e
        except PyMongoError as e:
            raise BackendError(f"Failed to create database record: {e}") from e

    async def merge(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        set_ops = {k: v for k, v in fields.items() if k != "_id"}
        try:
            res = await self.db[collection].find_one_and_update(
                {"_id": doc_id},
                {"$set": set_ops},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise BackendError(f"Failed to update database record: {e}") from e
        if res is None:
            raise RecordNotFound(f"No record {doc_id!r} in {collection!r}")
        return res

    async def delete(self, collection: str, doc_id: str) -> bool:
        try:
            res = await self.db[collection].delete_one({"_id": doc_id})
        except PyMongoError as e:
            raise BackendError(f"Failed to delete database record: {e}") from e
        return res.deleted_count == 1

    async def delete_expired(self, collection: str, field: str, before: datetime) -> int:
        try:
            res = await self.db[collection].delete_many({field: {"$lt": before}})
        except PyMongoError as e:
            raise BackendError(f"Failed to purge expired records: {e}") from e
        log.debug("Purged %s expired record(s) from %s", res.deleted_count, collection)
        return res.deleted_count

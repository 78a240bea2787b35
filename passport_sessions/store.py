# passport_sessions/store.py
"""
Session persistence on top of a keyed document store.

``SessionStore`` holds nothing but a backend handle and a collection name,
so a single instance can be shared by every request. Expired records are
evicted lazily when they are read; ``purge_expired`` and the optional
reaper only keep storage from growing.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from .codec import RecordCodec, SessionState
from .dal.base import DocumentStore
from .dal.mongo import MongoDocumentStore
from .dates import Duration, ExpiryCalculator, is_non_positive
from .exceptions import (
    BackendError,
    DeleteError,
    DeserializationError,
    ErrorKind,
    LoadError,
    SaveError,
    SerializationError,
    TtlUpdateError,
    UpdateError,
)
from .keys import KeyGenerator
from .models.session import SessionRecord, SessionRecordPatch

log = logging.getLogger("passport_sessions.store")

INVALID_DURATION = "Invalid duration length!"
EXPIRY_FIELD = "expiry"


class SessionStore:
    def __init__(
        self,
        backend: DocumentStore,
        collection: str,
        *,
        key_generator: Optional[KeyGenerator] = None,
        expiry: Optional[ExpiryCalculator] = None,
        codec: Optional[RecordCodec] = None,
    ) -> None:
        self._backend = backend
        self._collection = collection
        self._keys = key_generator or KeyGenerator()
        self._expiry = expiry or ExpiryCalculator()
        self._codec = codec or RecordCodec()

    @classmethod
    def from_connection(cls, db: AsyncIOMotorDatabase, collection: str, **kwargs) -> "SessionStore":
        """
        Build a store over an existing, authenticated Motor database handle.

        Neither the connection nor the database is checked here; make sure
        they are set up before the first request.
        """
        return cls(MongoDocumentStore(db), collection, **kwargs)

    @property
    def collection(self) -> str:
        return self._collection

    # ----------------- Lifecycle -----------------

    async def load(self, session_key: str) -> Optional[SessionState]:
        log.debug("Loading session state from db..")
        try:
            doc = await self._backend.get(self._collection, session_key)
        except BackendError as e:
            log.error("Reading database record failed! %s", e)
            raise LoadError(ErrorKind.other, "Reading database record failed!") from e

        if doc is None:
            log.debug("No session record for the given key")
            return None

        try:
            record = SessionRecord.model_validate(doc)
        except ValidationError as e:
            raise LoadError(ErrorKind.deserialization, "Session record is malformed") from e

        if self._expiry.is_expired(record.expiry):
            await self._evict(session_key)
            return None

        try:
            return self._codec.decode(record.token)
        except DeserializationError as e:
            raise LoadError(ErrorKind.deserialization, str(e)) from e

    async def save(self, session_state: Mapping[str, str], ttl: Duration) -> str:
        try:
            body = self._codec.encode(session_state)
        except SerializationError as e:
            raise SaveError(ErrorKind.serialization, str(e)) from e

        session_key = self._keys.generate()

        expiry_time = self._expiry.compute(ttl)
        if expiry_time is None:
            raise SaveError(ErrorKind.other, INVALID_DURATION)

        record = SessionRecord(_id=session_key, token=body, expiry=expiry_time)
        try:
            await self._backend.create(self._collection, session_key, record.to_fields())
        except BackendError as e:
            raise SaveError(ErrorKind.other, "Failed to create database record!") from e

        return session_key

    async def update(self, session_key: str, session_state: Mapping[str, str], ttl: Duration) -> str:
        try:
            body = self._codec.encode(session_state)
        except SerializationError as e:
            raise UpdateError(ErrorKind.serialization, str(e)) from e

        expiry_time = self._expiry.compute(ttl)
        if expiry_time is None:
            raise UpdateError(ErrorKind.other, INVALID_DURATION)

        patch = SessionRecordPatch(token=body, expiry=expiry_time)
        try:
            await self._backend.merge(self._collection, session_key, patch.to_fields())
        except BackendError as e:
            raise UpdateError(ErrorKind.other, "Failed to update database record!") from e

        return session_key

    async def extend_ttl(self, session_key: str, ttl: Duration) -> None:
        """
        Push the expiry of a session out by ``ttl`` from now.

        A zero or negative ``ttl`` deletes the session instead.
        """
        if is_non_positive(ttl):
            try:
                await self._backend.delete(self._collection, session_key)
            except BackendError as e:
                raise TtlUpdateError("Failed to delete database record") from e
            return

        expiry_time = self._expiry.compute(ttl)
        if expiry_time is None:
            raise TtlUpdateError(INVALID_DURATION)

        patch = SessionRecordPatch(expiry=expiry_time)
        try:
            await self._backend.merge(self._collection, session_key, patch.to_fields())
        except BackendError as e:
            raise TtlUpdateError("Failed to update database record") from e

    # for middleware that calls it update_ttl
    update_ttl = extend_ttl

    async def delete(self, session_key: str) -> None:
        log.debug("Deleting session from DB")
        try:
            await self._backend.delete(self._collection, session_key)
        except BackendError as e:
            log.debug("Error deleting from DB: %r", e)
            raise DeleteError("Failed to delete database record") from e
        log.debug("Deleting from DB worked")

    # ----------------- Housekeeping -----------------

    async def purge_expired(self) -> int:
        """Remove every record whose expiry has passed. Returns how many went."""
        return await self._backend.delete_expired(self._collection, EXPIRY_FIELD, self._expiry.now())

    async def ensure_indexes(self) -> bool:
        """Create a TTL index on the expiry field when the backend supports one."""
        ensure = getattr(self._backend, "ensure_ttl_index", None)
        if ensure is None:
            return False
        await ensure(self._collection, EXPIRY_FIELD)
        return True

    # ----------------- Helpers -----------------

    async def _evict(self, session_key: str) -> None:
        # the record is already logically gone; a failed delete changes nothing for the caller
        try:
            await self._backend.delete(self._collection, session_key)
        except BackendError as e:
            log.warning("Failed to delete expired session record: %s", e)

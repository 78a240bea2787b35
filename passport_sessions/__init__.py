"""
Session persistence for web session middleware, backed by a document store.

Example::

    db = AsyncIOMotorClient("mongodb://localhost:27017", tz_aware=True)["passport"]
    store = SessionStore.from_connection(db, "sessions")

    key = await store.save({"user_id": "42"}, timedelta(days=7))
    state = await store.load(key)
"""

from .codec import RecordCodec, SessionState
from .dal import DocumentStore, InMemoryDocumentStore, MongoDocumentStore
from .dates import ExpiryCalculator, SystemClock, add_duration
from .exceptions import (
    BackendError,
    DeleteError,
    DeserializationError,
    ErrorKind,
    LoadError,
    RecordNotFound,
    SaveError,
    SerializationError,
    SessionStoreError,
    TtlUpdateError,
    UpdateError,
)
from .keys import KeyGenerator, generate_session_key
from .reaper import ExpiredSessionReaper
from .store import SessionStore

__all__ = [
    "SessionStore",
    "SessionState",
    "DocumentStore",
    "InMemoryDocumentStore",
    "MongoDocumentStore",
    "KeyGenerator",
    "generate_session_key",
    "ExpiryCalculator",
    "SystemClock",
    "add_duration",
    "RecordCodec",
    "ExpiredSessionReaper",
    "ErrorKind",
    "SessionStoreError",
    "SerializationError",
    "DeserializationError",
    "BackendError",
    "RecordNotFound",
    "LoadError",
    "SaveError",
    "UpdateError",
    "TtlUpdateError",
    "DeleteError",
]

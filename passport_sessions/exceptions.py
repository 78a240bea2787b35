"""Errors raised by the session store and its backends."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    serialization = "serialization"
    deserialization = "deserialization"
    other = "other"


class SessionStoreError(Exception):
    """Base class for everything raised by :mod:`passport_sessions`."""


# --- Component errors ---------------------------------------------------------

class SerializationError(SessionStoreError):
    """Session state could not be encoded."""


class DeserializationError(SessionStoreError):
    """A stored payload is corrupt or in a foreign format."""


class BackendError(SessionStoreError):
    """The document store was unreachable or rejected the operation."""


class RecordNotFound(BackendError):
    """The targeted record does not exist (anymore)."""


# --- Operation errors ---------------------------------------------------------

class _KindedError(SessionStoreError):
    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={str(self)!r})"


class LoadError(_KindedError):
    """Loading a session failed; callers should treat the session as lost."""


class SaveError(_KindedError):
    """Creating a session record failed."""


class UpdateError(_KindedError):
    """Rewriting a session record failed."""


class TtlUpdateError(SessionStoreError):
    """Extending (or expiring) a session's TTL failed."""


class DeleteError(SessionStoreError):
    """Deleting a session record failed."""


__all__ = [
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

# passport_sessions/models/session.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..dates import ensure_utc


class SessionRecord(BaseModel):
    """One stored session: identifier, encoded state and absolute expiry."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="_id")
    token: str
    expiry: datetime

    @field_validator("expiry")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def to_fields(self) -> Dict[str, Any]:
        """Document body without the identifier."""
        return self.model_dump(exclude={"id"})


class SessionRecordPatch(BaseModel):
    """
    Partial update. Only fields that were explicitly set are written, so an
    unset field is left untouched rather than cleared.
    """
    model_config = ConfigDict(extra="forbid")

    token: Optional[str] = None
    expiry: Optional[datetime] = None

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)

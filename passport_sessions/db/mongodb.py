# passport_sessions/db/mongodb.py
from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from ..config import settings

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


async def get_db() -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is None:
        # tz_aware so expiry comes back as an aware UTC datetime
        _client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
        _db = _client[settings.MONGO_DB]
    return _db


async def close_db() -> None:
    global _client, _db
    if _client:
        _client.close()
        _client = None
        _db = None

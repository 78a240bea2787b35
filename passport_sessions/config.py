# passport_sessions/config.py
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SESSIONS_", env_file=".env", extra="ignore")

    # MongoDB
    MONGO_URI: str = Field(default="mongodb://localhost:27017")
    MONGO_DB: str = Field(default="passport")

    # Collection holding one document per session
    COLLECTION: str = Field(default="sessions")

    # Let MongoDB drop expired records on its own, in addition to lazy expiry on read
    ENSURE_TTL_INDEX: bool = Field(default=True)

    # Background purge of expired records; 0 disables it
    REAPER_INTERVAL_SECONDS: float = Field(default=0, ge=0)

    LOG_LEVEL: str = Field(default="INFO")


settings = Settings()

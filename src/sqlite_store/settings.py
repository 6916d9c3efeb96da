"""
sqlite_store.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the store and its logging.
- Resolve the configured database file against the working directory.
- Offer a cached settings instance for process-wide use.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

MEMORY_DATABASE = ":memory:"


class StoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SQLITE_STORE_", case_sensitive=False)

    service_name: str = "sqlite-store"
    log_level: str = "INFO"

    # Empty or unset means a non-persistent in-memory database.
    file: str | None = None

    # Upper bound on missing ancestor directories created for `file`.
    provision_max_depth: int = 32

    @property
    def database_path(self) -> str:
        if not self.file:
            return MEMORY_DATABASE
        return os.path.abspath(self.file)


@lru_cache(maxsize=1)
def get_settings() -> StoreSettings:
    # Cache avoids re-parsing env vars on every call site.
    return StoreSettings()


# --- Module Notes -----------------------------------------------------------
# `database_path` reads the working directory each time it is accessed; `SqliteStore`
# reads it once, when the store is constructed.

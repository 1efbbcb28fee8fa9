"""
person_registry.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the registry.
- Offer a cached settings instance for the bootstrap layer.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PERSON_REGISTRY_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "person-registry"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Persistence
    database_url: str = Field(default="sqlite+aiosqlite:///./person_registry.db", repr=False)

    # Removing a person also removes coordinates/location rows nobody else references.
    cascade_delete: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# database_url may embed credentials, so it is kept out of repr/logging.

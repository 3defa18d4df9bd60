from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration for products-api.

    MONGO_URL has no default: a process started without it fails while the
    settings are loaded, before any request is served.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Service ---
    app_name: str = Field(default="products-api", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    environment: str = Field(default="local", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # --- CORS (Cross-Origin Resource Sharing) allowlist (CSV) ---
    cors_allowed_origins: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ALLOWED_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, validation_alias="CORS_ALLOW_CREDENTIALS")

    def cors_origins_list(self) -> List[str]:
        return [x.strip() for x in self.cors_allowed_origins.split(",") if x.strip()]

    # -------------------------
    # MongoDB
    # -------------------------
    mongo_url: str = Field(validation_alias="MONGO_URL")

    # Used only when MONGO_URL does not name a database itself.
    mongo_db_name: str = Field(default="products_db", validation_alias="MONGO_DB_NAME")
    mongo_collection: str = Field(default="products", validation_alias="MONGO_COLLECTION")

    # Server selection timeout; an unreachable server surfaces as 503 after this.
    mongo_timeout_ms: int = Field(default=5000, validation_alias="MONGO_TIMEOUT_MS")

    @property
    def mongo_url_redacted(self) -> str:
        """
        MONGO_URL with the password replaced, safe for logs.
        """
        scheme, sep, rest = self.mongo_url.partition("://")
        if not sep or "@" not in rest:
            return self.mongo_url
        creds, _, host = rest.rpartition("@")
        user: Optional[str] = creds.split(":", 1)[0] if creds else None
        return f"{scheme}://{user}:***@{host}" if user else f"{scheme}://{host}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

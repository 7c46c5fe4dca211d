from functools import lru_cache
from typing import Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]
StorageBackendName = Literal["redis", "memory"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "Storefront"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Storage (per-session persisted stores)
    STORAGE_BACKEND: StorageBackendName = "memory"
    REDIS_URL: str = ""
    storage_prefix: str = "sf"                   # redis key namespace
    PARTITION_STORAGE_BY_TENANT: bool = False    # keys are tenant-agnostic unless enabled

    # Catalog / company service
    CATALOG_API_BASE_URL: str = "http://localhost:8080/api/v1/rurify-services"
    catalog_api_timeout_s: float = 10.0

    # Tenant resolution
    DEFAULT_TENANT: str = "babaihomefoods"
    TENANT_DEV_ALIAS: str = "mashallah"
    SECONDARY_TENANT: str = "bavahomefoods"
    TENANT_SECONDARY_ALIAS: str = "mana-website-toone"

    # Expiration windows (seconds)
    category_ttl: int = 60 * 60                  # 1 hour
    cart_session_ttl: int = 10 * 3600            # 10 hours
    wishlist_ttl: int = 7 * 24 * 3600            # 7 days
    catalog_storage_ttl: int = 24 * 3600         # retention of the per-session catalog blob

    # HTTP
    api_prefix: str = "/api/v1"
    session_cookie_name: str = "sf_session"
    ALLOWED_ORIGINS: str = ""

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )

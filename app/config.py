from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

SERVICE_NAME = "apidemo"
VERSION = "0.1.0"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    SERVICE_PORT: int = 8080
    LOG_JSON: bool = True
    LOG_LEVEL: Literal["debug", "info", "warning", "error"] = "info"
    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    # Image previews
    PREVIEW_MAX_WIDTH: int = 200
    PREVIEW_MAX_HEIGHT: int = 200
    PREVIEW_FIT_INSIDE: bool = False  # Scale by the tighter axis instead of the dominant one
    # Upper bound for request bodies (base64 image uploads included)
    MAX_REQUEST_SIZE: int = 16 * 1024 * 1024
    CORS_ALLOW_ORIGINS: str = "*"  # Comma-separated list of origins

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

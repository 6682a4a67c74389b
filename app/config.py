"""Application configuration using Pydantic Settings."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Backends
    catalog_api_url: str = "https://dev-catalog-s.russoft-it.ru"
    auth_api_url: str = "https://dev-auth-s.russoft-it.ru"
    image_api_url: str = "https://dev-image-s.russoft-it.ru"
    http_timeout: float = 15.0

    # Slugs
    slug_scan_limit: int = 5000
    slug_check_debounce_ms: int = 400
    slug_check_timeout: Optional[float] = 10.0
    slug_max_attempts: int = 1000

    # Session
    session_file: Optional[str] = None

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def slug_check_debounce(self) -> float:
        """Debounce window for live slug checks, in seconds."""
        return self.slug_check_debounce_ms / 1000


settings = Settings()

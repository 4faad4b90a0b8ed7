"""Shared configuration for the mirror and its backend client."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Backend Configuration
    backend_url: str = "http://localhost:8765"
    backend_timeout: int = 30

    # Pagination
    default_items_per_page: int = 10

    # Extraction
    extraction_trigger_cooldown: float = 60.0  # seconds

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()

"""Application settings loaded from environment variables."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="REVIEW_FEED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Literal["development", "production"] = "development"
    debug: bool = True

    # Project paths
    base_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent)

    # Review source
    reviews_url: str | None = None
    response_file: str = "data/getReviews.response.json"
    page_limit: int = Field(default=20, ge=1)

    # Simulated network latency for the file-backed source (seconds)
    simulated_latency_min: float = 0.1
    simulated_latency_max: float = 1.0

    # Asset loading
    asset_cache_capacity: int = Field(default=100, ge=1)
    max_concurrent_requests: int = 6
    request_timeout: int = 30
    max_retries: int = 2

    # List behaviour
    default_max_lines: int = 3
    prefetch_screens: float = 2.5

    # Typography
    font_path: str | None = None

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/review_feed.log"

    def resolve_path(self, path: str | Path) -> Path:
        """Resolve a possibly relative path against the project directory."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.base_dir / path


# Global settings instance
settings = Settings()

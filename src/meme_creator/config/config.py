"""Application configuration module."""

from typing import List, Literal, Optional, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings using Pydantic BaseSettings.

    Automatically reads from environment variables.
    """

    # Application settings
    app_name: str = "Meme Creator"
    app_version: str = "0.1.0"
    app_env: str = "development"
    log_level: str = "INFO"
    log_json: bool = True
    log_file: Optional[str] = None

    # Record store
    database_url: str = "sqlite:///./meme_creator.db"

    # Existence cache
    redis_url: Optional[str] = None

    # Blob store
    blob_backend: Literal["local", "s3"] = "local"
    blob_root: str = "./blobs"
    blob_bucket: str = "meme-creator"
    s3_endpoint_url: Optional[str] = None
    aws_region: str = "us-east-1"
    public_url_prefix: str = "http://localhost:8000/blobs/meme-creator"

    # Task dispatch
    dispatcher_backend: Literal["inprocess", "redis"] = "inprocess"
    task_queue_name: str = "render-jobs"
    task_max_attempts: int = 5
    task_backoff_seconds: float = 1.0
    task_workers: int = 2
    task_result_history: int = 1000

    # Rendering
    font_path: Optional[str] = None
    caption_top_margin: int = 15
    caption_bottom_band: int = 100
    caption_font_sizes: List[int] = [72, 48, 36, 24]

    # Request limits
    max_template_size: int = 5 * 1024 * 1024  # 5MB
    meme_list_limit: int = 100

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: Any) -> Any:
        """Validate and normalize database URL."""
        if not v:
            return "sqlite:///./meme_creator.db"
        return v

    @field_validator("caption_font_sizes")
    @classmethod
    def validate_font_sizes(cls, v: List[int]) -> List[int]:
        """The size ladder must be non-empty and strictly descending."""
        if not v:
            raise ValueError("caption_font_sizes must not be empty")
        if any(a <= b for a, b in zip(v, v[1:])):
            raise ValueError("caption_font_sizes must be strictly descending")
        return v

    @field_validator("public_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Public URLs are built as ``prefix + "/" + key``."""
        return v.rstrip("/")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings instance
    """
    return settings

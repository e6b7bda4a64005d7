"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

# Project root: repository checkout
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./race_charts.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Datasport ===
    datasport_proxy: Optional[str] = Field(
        default=None,
        description="URL prefix for fetching results.json through a proxy"
    )
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # === Uploads ===
    max_upload_mb: int = Field(default=20, gt=0)

    # === Charts ===
    default_bucket_size_seconds: int = Field(default=60, gt=0)
    start_bucket_count: int = Field(default=30, gt=0)
    attribution_url: str = Field(
        default="https://bukowskiadam.github.io/datasport-results-analyzer/",
        description="Link shown in the chart footer and watermark"
    )

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('datasport_proxy')
    @classmethod
    def empty_proxy_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat DATASPORT_PROXY="" as no proxy."""
        if v is not None and not v.strip():
            return None
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()

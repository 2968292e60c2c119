"""
Settings for the consulting desk, read from the environment and an optional
.env file with pydantic-settings.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path

# Repository root, where alembic.ini lives
BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level when debug is off")

    # API Configuration
    api_title: str = Field(default="Consulting Desk")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default=f"sqlite:///{BASE_DIR / 'consultdesk.db'}",
        description="SQLAlchemy database URL"
    )
    db_timeout_seconds: int = Field(default=10, ge=1, description="Lock, statement and pool timeout")
    db_slow_query_ms: int = Field(default=500, ge=0, description="Log statements slower than this")
    auto_create_tables: bool = Field(default=True, description="Create missing tables at start-up")

    # CORS
    cors_origins: str | List[str] = Field(default="http://localhost:3000,http://localhost:5173")
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Demo identity (stands in for authentication)
    demo_user_id: str = Field(default="user-1")
    demo_user_username: str = Field(default="consultant")
    demo_user_name: str = Field(default="Dr. Sarah Chen")
    demo_user_email: str = Field(default="sarah.chen@example.com")
    demo_user_title: Optional[str] = Field(default="Research Software Consultant")
    demo_user_address: Optional[str] = Field(default="123 University Ave, Boston, MA 02115")
    demo_user_phone: Optional[str] = Field(default="(555) 123-4567")

    # Invoicing
    invoice_number_prefix: str = Field(default="INV")
    invoice_number_max_attempts: int = Field(default=5, ge=1)
    default_currency: str = Field(default="USD")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            if not v.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in v.split(",")]
        elif v is None:
            return list(DEFAULT_CORS_ORIGINS)
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()


# Create a global settings instance
settings = get_settings()

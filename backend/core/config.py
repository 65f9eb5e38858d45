"""
Filadex: Configuration settings.

Loads from environment variables (and an optional .env file) with sensible
defaults. DATABASE_URL wins; otherwise a PostgreSQL URL is assembled from the
discrete POSTGRES_* parts; otherwise a local SQLite file is used.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: Optional[str] = None
    postgres_host: Optional[str] = None
    postgres_port: int = 5432
    postgres_user: str = "filadex"
    postgres_password: str = ""
    postgres_db: str = "filadex"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # Session token signing. Empty means a random per-process secret.
    jwt_secret: Optional[str] = None
    session_max_age_hours: int = 24

    # Cost factor for bcrypt password hashes
    bcrypt_rounds: int = Field(default=12, ge=10, le=16)

    # Seeded on first boot when the users table is empty
    admin_username: str = "admin"
    admin_password: str = "admin"

    # Create a starter catalog (manufacturers, materials, ...) on empty tables
    seed_reference_data: bool = False

    # Frontend - comma-separated list, e.g. CORS_ORIGINS=http://localhost:5173
    cors_origins: str = ""

    # SameSite policy for the auth cookie
    cookie_samesite: str = "lax"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def sqlalchemy_url(self) -> str:
        """Effective database URL."""
        if self.database_url:
            return self.database_url
        if self.postgres_host:
            return (
                f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        return "sqlite:///./filadex.db"


settings = Settings()

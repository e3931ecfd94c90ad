"""Application settings and configuration.

This module defines all configuration options for the passclub service.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="passclub", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    static_dir: Path = Field(default=Path("public"), alias="STATIC_DIR")

    # Database configuration
    db_path: str = Field(default="./meme.db", alias="DB_PATH")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Audit trail of accepted registrations
    audit_log_path: Path = Field(
        default=Path("secure") / "password_log.json",
        alias="AUDIT_LOG_PATH",
    )

    # Leaderboard
    leaderboard_cache_seconds: float = Field(default=60.0, alias="LEADERBOARD_CACHE_SECONDS")
    leaderboard_size: int = Field(default=10, alias="LEADERBOARD_SIZE")

    # Run the duplicate check and insert under a process-wide lock
    serialize_registrations: bool = Field(default=False, alias="SERIALIZE_REGISTRATIONS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL, preferring an explicit DATABASE_URL.

        Returns:
            SQLAlchemy URL for the record store
        """
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.db_path}"


settings = Settings()

# src/uploads_api/config/settings.py
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from uploads_api.config.settings import get_settings
        settings = get_settings()
        upload_dir = settings.upload_dir
    """

    # Application Settings
    app_name: str = Field(
        default="uploads-api",
        description="Application name"
    )

    host: str = Field(
        default="0.0.0.0",
        description="Interface the server binds to"
    )

    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "UPLOADS_API_PORT"),
        description="Listening port"
    )

    # Storage Configuration
    upload_dir: Path = Field(
        default=Path("uploads"),
        description="Shared directory holding uploaded files and their bookkeeping artifacts"
    )

    progress_suffix: str = Field(
        default=".info",
        description="Suffix of the progress artifact the upload engine keeps per upload"
    )

    sidecar_suffix: str = Field(
        default=".json",
        description="Suffix of the sidecar metadata artifact the upload engine may keep per upload"
    )

    # Routing
    upload_path: str = Field(
        default="/files",
        description="Path prefix handed to the resumable upload engine"
    )

    api_prefix: str = Field(
        default="/api",
        description="Path prefix of the JSON API"
    )

    static_dir: Path = Field(
        default=Path("public"),
        description="Static front-end directory, served at / when it exists"
    )

    cors_allow_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware"
    )

    # Upload engine
    upload_engine: Optional[str] = Field(
        default=None,
        description="Dotted path 'module:factory' of the resumable upload engine factory"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("progress_suffix", "sidecar_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Artifact suffixes are extensions such as '.info'."""
        if not v or not v.startswith(".") or len(v) < 2:
            raise ValueError(f"Invalid artifact suffix: {v!r}. Must start with '.'")
        return v

    @field_validator("upload_path", "api_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"Invalid path prefix: {v!r}. Must start with '/'")
        return v.rstrip("/") or "/"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v

    def get_environment_dict(self) -> dict:
        """Get configuration as a dictionary suitable for display or subprocess environments.

        Returns:
            Dictionary of environment variables
        """
        return {
            'APP_NAME': self.app_name,
            'HOST': self.host,
            'PORT': str(self.port),
            'UPLOAD_DIR': str(self.upload_dir),
            'UPLOAD_PATH': self.upload_path,
            'API_PREFIX': self.api_prefix,
            'PROGRESS_SUFFIX': self.progress_suffix,
            'SIDECAR_SUFFIX': self.sidecar_suffix,
            'UPLOAD_ENGINE': self.upload_engine or '',
            'STATIC_DIR': str(self.static_dir),
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()

"""
Configuration module for the Student Health Portal service.
Uses Pydantic BaseSettings for validation - app fails fast if required config is missing.
"""
import sys
import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with validation.
    Selecting the Supabase backend without credentials stops the app at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database Configuration (local backend)
    portal_svc_db_dir: str = Field(default="data", description="Database directory")
    portal_svc_db_file: str = Field(default="student_health.db", description="Database filename")
    portal_svc_db_busy_timeout: int = Field(default=5000, description="SQLite busy timeout in milliseconds")

    # API Configuration
    portal_svc_host: str = Field(default="0.0.0.0", description="API host")
    portal_svc_port: int = Field(default=8000, description="API port")
    portal_svc_reload: bool = Field(default=False, description="Enable hot reload")

    # Blob storage Configuration (local backend)
    portal_svc_upload_dir: str = Field(default="uploads", description="Root directory for stored files")
    portal_svc_public_base_url: str = Field(
        default="http://localhost:8000/files",
        description="Base URL under which locally stored files are served",
    )

    # Collaborator backend selection
    portal_svc_backend: Literal["local", "supabase"] = Field(
        default="local",
        description="'local' uses SQLite + filesystem + local accounts, 'supabase' uses a hosted project",
    )
    portal_svc_session_ttl_minutes: int = Field(
        default=60 * 24 * 7,
        ge=1,
        description="Lifetime of sessions issued by the local identity backend",
    )

    # Supabase Configuration (required when backend is 'supabase')
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_key: str = Field(default="", description="Supabase API key")

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """
        Validate backend credentials at startup and fail fast with clear error messages.
        """
        errors = []

        if self.portal_svc_backend == "supabase":
            if not self.supabase_url:
                errors.append("SUPABASE_URL is required when PORTAL_SVC_BACKEND=supabase")
            if not self.supabase_key:
                errors.append("SUPABASE_KEY is required when PORTAL_SVC_BACKEND=supabase")
        elif self.supabase_url:
            logger.warning(
                "SUPABASE_URL is set but PORTAL_SVC_BACKEND=local - Supabase will not be used"
            )

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            logger.critical(error_msg)
            sys.exit(1)

        return self

    @property
    def database_path(self) -> str:
        """Get the full database path."""
        return str(Path(self.portal_svc_db_dir) / self.portal_svc_db_file)

    @property
    def uses_supabase(self) -> bool:
        return self.portal_svc_backend == "supabase"

    def ensure_directories(self) -> None:
        """Ensure required directories exist."""
        Path(self.portal_svc_db_dir).mkdir(parents=True, exist_ok=True)
        Path(self.portal_svc_upload_dir).mkdir(parents=True, exist_ok=True)


# Create global settings instance - fails fast if required config is missing
settings = Settings()

# Ensure directories exist on import
settings.ensure_directories()

# Module-level exports for existing code
DATABASE_DIR = settings.portal_svc_db_dir
DATABASE_FILE = settings.portal_svc_db_file
DATABASE_PATH = settings.database_path
DATABASE_BUSY_TIMEOUT = settings.portal_svc_db_busy_timeout

API_HOST = settings.portal_svc_host
API_PORT = settings.portal_svc_port
API_RELOAD = settings.portal_svc_reload

UPLOAD_DIR = settings.portal_svc_upload_dir
PUBLIC_BASE_URL = settings.portal_svc_public_base_url

BACKEND = settings.portal_svc_backend
SESSION_TTL_MINUTES = settings.portal_svc_session_ttl_minutes

SUPABASE_URL = settings.supabase_url
SUPABASE_KEY = settings.supabase_key

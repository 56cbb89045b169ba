"""Shared configuration settings for MemoryLane services."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    core_host: str = "0.0.0.0"
    core_port: int = 5000
    database_path: str = "/data/db/memorylane.db"
    image_storage_path: str = "/data/images"

    # Transactional mail (Resend)
    resend_api_key: str = ""
    mail_from: str = "MemoryLane <onboarding@resend.dev>"
    notify_email: str = ""


def load_config() -> Settings:
    """Load and return application settings."""
    return Settings()

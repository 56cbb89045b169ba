"""Configuration for the memory upload client."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Upload client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend_url: str = "http://localhost:5000"
    tagger_url: str = "http://127.0.0.1:8000"
    tag_top_k: int = 5
    request_timeout: float = 30.0


def load_client_settings() -> ClientSettings:
    """Load and return upload client settings."""
    return ClientSettings()

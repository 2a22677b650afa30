from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckBuilder"
    debug: bool = False
    log_level: str = "INFO"

    scryfall_api_url: str = "https://api.scryfall.com"
    scryfall_timeout_seconds: float = 30.0
    user_agent: str = "DeckBuilder/1.0"

    # Scryfall bulk JSON used as the read-only metadata snapshot
    metadata_cache_path: Path | None = None


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SCRYFETCH_")

    api_url: str = "https://api.scryfall.com"

    # Scryfall asks for 50-100ms between requests
    api_delay_ms: int = 100

    user_agent: str = "scryfetch/0.1"

    timeout: float = 30.0


settings = Settings()


# Language codes accepted by the /cards/{code}/{number}/{lang} endpoint
VALID_LANGUAGES = frozenset({"en", "es", "fr", "de", "it", "pt", "ja", "ko", "ru", "zhs", "zht"})

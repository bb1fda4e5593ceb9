"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Showtimes search service
    showtimes_base_url: str = "http://www.google.com"
    showtimes_search_path: str = "/movies"

    # When set, a failure on a later page returns the rows fetched so far
    # instead of failing the whole query.
    showtimes_allow_partial_results: bool = False

    # Scraping settings
    scrape_timeout: int = 30
    scrape_user_agent: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

    # Logging
    log_level: str = "INFO"


# Global settings instance
settings = Settings()

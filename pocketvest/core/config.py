"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        data_dir: Directory holding the local durable files.
        credentials_file: Credential store file name, relative to data_dir.
        watchlist_database_url: SQLAlchemy URL of the watchlist database.
        news_api_base_url: Endpoint of the remote article search API.
        news_api_token: Token sent as the api_token query parameter.
        news_page_size: Articles requested per page.
        news_lookback_days: Only articles published in the last N days.
        news_categories: Comma-separated category filter.
        news_language: Article language filter.
        news_use_fixtures: Serve built-in sample articles instead of the API.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "PocketVest"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    data_dir: str = "./data"
    credentials_file: str = "credentials.json"
    watchlist_database_url: Optional[str] = None

    news_api_base_url: str = "https://api.thenewsapi.com/v1/news/all"
    news_api_token: str = ""
    news_page_size: int = 3
    news_lookback_days: int = 7
    news_categories: str = "business,general"
    news_language: str = "en"
    news_use_fixtures: bool = False

    def get_credentials_path(self) -> Path:
        """Return the effective path of the credential store file."""
        path = Path(self.credentials_file)
        if path.is_absolute():
            return path
        return Path(self.data_dir) / path

    def get_watchlist_database_url(self) -> str:
        """Return the effective watchlist database URL.

        Priority:
        1. Explicit `WATCHLIST_DATABASE_URL`
        2. A SQLite file inside data_dir
        """
        if self.watchlist_database_url:
            return self.watchlist_database_url
        return f"sqlite:///{Path(self.data_dir) / 'watchlist.db'}"

    def get_news_categories(self) -> tuple[str, ...]:
        """Return the category filter as a tuple of names."""
        return tuple(c.strip() for c in self.news_categories.split(",") if c.strip())


settings = Settings()

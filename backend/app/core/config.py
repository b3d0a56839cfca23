"""Application configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

from scraper.config import DEFAULT_USER_AGENT, ScraperConfig
from scraper.utils import CDN_HOST


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    app_name: str = "Video Scrape Proxy"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # CORS - accepts comma-separated string from env
    cors_origins: str = "*"

    # Upstream site
    source_base_url: str = "https://xhamster19.com"
    cdn_host: str = CDN_HOST
    user_agent: str = DEFAULT_USER_AGENT
    search_timeout: float = 10.0
    details_timeout: float = 15.0

    @property
    def cors_origins_list(self) -> list[str]:
        """Return CORS origins as a list."""
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]

    def scraper_config(self) -> ScraperConfig:
        """Scraper configuration derived from these settings."""
        return ScraperConfig(
            source_base_url=self.source_base_url,
            cdn_host=self.cdn_host,
            user_agent=self.user_agent,
            search_timeout=self.search_timeout,
            details_timeout=self.details_timeout,
        )


settings = Settings()

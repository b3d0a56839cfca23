"""
Configuration dataclasses for the scraper.
"""

from dataclasses import dataclass
from urllib.parse import quote

from .utils import CDN_HOST


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class ScraperConfig:
    """Main configuration for the scraper."""
    # Upstream site
    source_base_url: str = "https://xhamster19.com"
    cdn_host: str = CDN_HOST
    user_agent: str = DEFAULT_USER_AGENT

    # Fetch timeouts (seconds)
    search_timeout: float = 10.0
    details_timeout: float = 15.0

    def search_url(self, query: str, page: int = 1) -> str:
        url = f"{self.source_base_url.rstrip('/')}/search/{quote(query, safe='')}"
        if page > 1:
            url += f"?page={page}"
        return url

    def page_url(self, path: str) -> str:
        return f"{self.source_base_url.rstrip('/')}/{path.lstrip('/')}"

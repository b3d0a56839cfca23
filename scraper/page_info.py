"""
Page-level extractors: pagination controls and Open Graph / Twitter metadata.

Both are best effort and fall back to defaults instead of raising.
"""

from typing import Optional

from bs4 import BeautifulSoup

from .config import ScraperConfig
from .models import PageMetadata, PaginationInfo
from .observer import Observer, notify
from .utils import canonical_path, escape_for_cdn, parse_int

PAGINATOR_BUTTON = '.xh-paginator-button'

OG_PROPERTIES = {
    'title': 'og:title',
    'description': 'og:description',
    'image': 'og:image',
    'url': 'og:url',
    'site_name': 'og:site_name',
    'type': 'og:type',
}

TWITTER_NAMES = {
    'twitter_card': 'twitter:card',
    'twitter_site': 'twitter:site',
    'twitter_creator': 'twitter:creator',
}


def extract_pagination(html: str, observer: Optional[Observer] = None) -> PaginationInfo:
    """Read the active page, the highest page number and next/previous links."""
    try:
        soup = BeautifulSoup(html, 'html.parser')
        pagination = PaginationInfo()

        active = soup.select_one(f'{PAGINATOR_BUTTON}.active')
        if active is not None:
            pagination.current_page = max(parse_int(active.get('data-page')) or 1, 1)

        max_page = 1
        for button in soup.select(PAGINATOR_BUTTON):
            page = parse_int(button.get('data-page'))
            if page and page > max_page:
                max_page = page
        pagination.total_pages = max_page

        pagination.has_next = soup.select_one('.next a[data-page="next"]') is not None
        pagination.has_previous = soup.select_one('.prev a[data-page="prev"]') is not None
        return pagination
    except Exception as e:
        notify(observer, 'pagination_failed', error=str(e))
        return PaginationInfo()


def _meta_content(soup, **attrs) -> str:
    tag = soup.find('meta', attrs=attrs)
    if tag is None:
        return ""
    return (tag.get('content') or "").strip()


def _link_href(soup, rel: str) -> str:
    tag = soup.find('link', rel=rel)
    if tag is None:
        return ""
    return (tag.get('href') or "").strip()


def extract_metadata(
    html: str,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> PageMetadata:
    """Collect Open Graph, Twitter card and canonical link values."""
    config = config or ScraperConfig()
    try:
        soup = BeautifulSoup(html, 'html.parser')
        metadata = PageMetadata()

        for field_name, prop in OG_PROPERTIES.items():
            setattr(metadata, field_name, _meta_content(soup, property=prop))
        for field_name, name in TWITTER_NAMES.items():
            setattr(metadata, field_name, _meta_content(soup, name=name))

        metadata.canonical = _link_href(soup, 'canonical')
        metadata.amp_url = _link_href(soup, 'amphtml')

        # Short paths for page URLs, CDN-safe image URL
        if metadata.url:
            metadata.url = canonical_path(metadata.url)
        if metadata.canonical:
            metadata.canonical = canonical_path(metadata.canonical)
        if metadata.amp_url:
            metadata.amp_url = canonical_path(metadata.amp_url)
        if metadata.image:
            metadata.image = escape_for_cdn(metadata.image, config.cdn_host)
        return metadata
    except Exception as e:
        notify(observer, 'metadata_failed', error=str(e))
        return PageMetadata()

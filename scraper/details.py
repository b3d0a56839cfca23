"""
Single-video extraction for detail pages.

The videoModel entry of the hydration payload is the primary source. When it
is missing or unparseable the page's meta tags and rendered markup are used
instead, and anything still missing is filled with defaults.
"""

import json
import re
import time
from html import unescape
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .config import ScraperConfig
from .json_recovery import repair_json_text
from .models import AuthorInfo, DetailRecord
from .observer import Observer, notify
from .strategies import script_texts
from .utils import canonical_path, clock_to_seconds, escape_for_cdn, first_number, parse_int, synthesize_id

VIDEO_MODEL_RE = re.compile(r'"videoModel":\s*({[^}]*(?:{[^}]*}[^}]*)*})')
STREAM_PRELOAD_RE = re.compile(r'<link rel="preload" href="([^"]+)"[^>]*crossorigin="true">')

DURATION_SELECTOR = '.duration, .video-duration, [class*="duration"]'
VIEWS_SELECTOR = '.views, .video-views, [class*="views"]'


def extract_stream_url(html: str) -> Optional[str]:
    """Direct media URL announced by the page's preload link."""
    match = STREAM_PRELOAD_RE.search(html or "")
    return unescape(match.group(1)) if match else None


def find_video_model(html: str, observer: Optional[Observer] = None) -> Optional[Dict[str, Any]]:
    """First videoModel object in the page's scripts that parses."""
    for content in script_texts(html, '"videoModel"'):
        match = VIDEO_MODEL_RE.search(content)
        if not match:
            continue
        try:
            model = json.loads(repair_json_text(match.group(1)))
        except ValueError as e:
            notify(observer, 'parse_failed', parser='videoModel', error=str(e))
            continue
        if isinstance(model, dict):
            return model
    return None


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _count(value) -> int:
    return (parse_int(value) if value else None) or 0


def _rating(value) -> float:
    if isinstance(value, dict):
        value = value.get('value')
    if isinstance(value, bool) or value is None:
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _short_path(url) -> str:
    if not isinstance(url, str) or not url:
        return ""
    return urlparse(url).path.lstrip('/')


def _author(value) -> Optional[AuthorInfo]:
    if not isinstance(value, dict):
        return None
    return AuthorInfo(
        id=value.get('id'),
        name=_text(value.get('name')),
        page_path=_short_path(value.get('pageURL')),
        verified=bool(value.get('verified')),
    )


def detail_from_model(
    model: Dict[str, Any],
    config: Optional[ScraperConfig] = None,
    clock: Callable[[], float] = time.time,
) -> DetailRecord:
    """Map a parsed videoModel onto a DetailRecord."""
    config = config or ScraperConfig()
    return DetailRecord(
        id=parse_int(model.get('id')) if model.get('id') else None,
        title=_text(model.get('title')) or _text(model.get('titleLocalized')),
        duration_seconds=parse_int(model.get('duration')) if model.get('duration') else None,
        created_at=(parse_int(model.get('created')) if model.get('created') else None) or int(clock()),
        view_count=_count(model.get('views')),
        comment_count=_count(model.get('comments')),
        rating_value=_rating(model.get('rating')),
        description=_text(model.get('description')),
        page_path=canonical_path(model.get('pageURL') or ""),
        thumbnail_url=escape_for_cdn(_text(model.get('thumbURL')), config.cdn_host),
        preview_thumbnail_url=_text(model.get('previewThumbURL')),
        sprite_url=_text(model.get('spriteURL')),
        trailer_url=_text(model.get('trailerURL')),
        download_url=_text(model.get('downloadFile')),
        is_vr=bool(model.get('isVR')),
        is_hd=bool(model.get('isHD')),
        is_fhd=bool(model.get('isFHD')),
        is_uhd=bool(model.get('isUHD')),
        author=_author(model.get('author')),
    )


def detail_from_markup(
    html: str,
    config: Optional[ScraperConfig] = None,
    clock: Callable[[], float] = time.time,
) -> Optional[DetailRecord]:
    """
    Build a DetailRecord from meta tags and rendered elements.

    Returns:
        DetailRecord, or None when the page has neither a title nor a video path
    """
    config = config or ScraperConfig()
    soup = BeautifulSoup(html, 'html.parser')

    def meta(prop: str) -> str:
        tag = soup.find('meta', property=prop)
        return _text(tag.get('content')) if tag is not None else ""

    title = meta('og:title')
    if not title:
        h1 = soup.find('h1')
        title = h1.get_text(strip=True) if h1 is not None else ""

    canonical = soup.find('link', rel='canonical')
    page_path = canonical_path(canonical.get('href') if canonical is not None else "")

    if not title and not page_path:
        return None

    duration = None
    duration_elem = soup.select_one(DURATION_SELECTOR)
    if duration_elem is not None:
        duration = clock_to_seconds(duration_elem.get_text(strip=True))

    views = None
    views_elem = soup.select_one(VIEWS_SELECTOR)
    if views_elem is not None:
        views = first_number(views_elem.get_text(strip=True))

    return DetailRecord(
        id=synthesize_id(page_path) if page_path else None,
        title=title,
        duration_seconds=duration,
        created_at=int(clock()),
        view_count=views or 0,
        description=meta('og:description'),
        page_path=page_path,
        thumbnail_url=escape_for_cdn(meta('og:image'), config.cdn_host),
    )


def extract_video_details(
    html: str,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> Optional[DetailRecord]:
    """
    Extract the single video a detail page describes.

    Returns:
        DetailRecord, or None when nothing identifying the video was found
    """
    try:
        model = find_video_model(html, observer)
        if model is not None:
            notify(observer, 'detail_extracted', source='videoModel')
            return detail_from_model(model, config)

        detail = detail_from_markup(html, config)
        notify(observer, 'detail_extracted', source='markup' if detail else 'none')
        return detail
    except Exception as e:
        notify(observer, 'detail_failed', error=f"{type(e).__name__}: {e}")
        return None

"""
Strict validation of scraped video candidates.

A candidate is the loosely typed dict an extraction strategy produced. It
either becomes a complete VideoRecord or is dropped; partial records are
never returned.
"""

from typing import Any, Dict, Iterable, List, Optional

from .config import ScraperConfig
from .models import LandingInfo, VideoRecord
from .observer import Observer, notify
from .utils import canonical_path, escape_for_cdn, parse_int

CandidateRecord = Dict[str, Any]

REQUIRED_FIELDS = ('id', 'title', 'duration', 'pageURL', 'thumbURL', 'views')


def _text(value) -> str:
    if not value:
        return ""
    return str(value).strip()


def _int_or_none(value) -> Optional[int]:
    return parse_int(value) if value else None


def _landing(value) -> Optional[LandingInfo]:
    if not value or not isinstance(value, dict):
        return None
    return LandingInfo(
        type=value.get('type'),
        id=_int_or_none(value.get('id')),
        name=value.get('name') or "",
        logo=value.get('logo') or "",
        link=value.get('link') or "",
    )


def missing_required_fields(
    id: Optional[int],
    title: str,
    duration: Optional[int],
    page_path: str,
    thumbnail_url: str,
    views: Optional[int],
) -> List[str]:
    """Return the names of the required fields that fail their check."""
    checks = (
        ('id', id is not None and id > 0),
        ('title', bool(title)),
        ('duration', duration is not None and duration > 0),
        ('pageURL', bool(page_path)),
        ('thumbURL', bool(thumbnail_url)),
        ('views', views is not None and views >= 0),
    )
    return [name for name, ok in checks if not ok]


def is_complete(record: VideoRecord) -> bool:
    """Final completeness gate applied to response collections."""
    if record is None:
        return False
    if missing_required_fields(record.id, record.title, record.duration_seconds,
                               record.page_path, record.thumbnail_url, record.view_count):
        return False
    return "videos/" in record.page_path


def clean_video(
    candidate: CandidateRecord,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> Optional[VideoRecord]:
    """
    Coerce a candidate into a VideoRecord.

    Args:
        candidate: Raw dict from an extraction strategy
        config: ScraperConfig, uses defaults if None
        observer: Receives a ``record_rejected`` event for dropped candidates

    Returns:
        VideoRecord with every required field valid, or None
    """
    if not isinstance(candidate, dict):
        return None
    config = config or ScraperConfig()

    full_page_url = _text(candidate.get('pageURL'))
    if '/videos/' not in full_page_url:
        notify(observer, 'record_skipped', reason='not a video URL', pageURL=full_page_url)
        return None

    video_id = _int_or_none(candidate.get('id'))
    title = _text(candidate.get('title'))
    duration = _int_or_none(candidate.get('duration'))
    page_path = canonical_path(full_page_url)
    thumbnail_url = escape_for_cdn(_text(candidate.get('thumbURL')), config.cdn_host)
    views = parse_int(candidate.get('views')) if candidate.get('views') else 0

    missing = missing_required_fields(video_id, title, duration, page_path, thumbnail_url, views)
    if missing:
        notify(observer, 'record_rejected', missing=missing, title=title, id=video_id)
        return None

    return VideoRecord(
        id=video_id,
        title=title,
        duration_seconds=duration,
        page_path=page_path,
        thumbnail_url=thumbnail_url,
        view_count=views,
        created_at=_int_or_none(candidate.get('created')),
        video_type=candidate.get('videoType') or "video",
        preview_thumbnail_url=_text(candidate.get('previewThumbURL')),
        high_res_image_url=escape_for_cdn(_text(candidate.get('imageURL')), config.cdn_host),
        sprite_url=_text(candidate.get('spriteURL')),
        trailer_url=_text(candidate.get('trailerURL')),
        trailer_fallback_url=_text(candidate.get('trailerFallbackUrl')),
        landing_info=_landing(candidate.get('landing')),
        is_custom_thumbnail=bool(candidate.get('isThumbCustom')),
        is_admin_custom_thumbnail=bool(candidate.get('isAdminCustomThumb')),
        user_country=candidate.get('userCountry') or "",
        attributes=candidate.get('attributes') if isinstance(candidate.get('attributes'), dict) else {},
        classes=candidate.get('classes') or "",
    )


def clean_candidates(
    candidates: Iterable[CandidateRecord],
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> List[VideoRecord]:
    """Clean every candidate, dropping the rejected ones."""
    cleaned = (clean_video(candidate, config, observer) for candidate in candidates)
    return [record for record in cleaned if record is not None]

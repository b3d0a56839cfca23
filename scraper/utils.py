"""
Shared utility functions for the scraper.
"""

import re
import time
from typing import Callable, Optional
from urllib.parse import urlparse

CDN_HOST = "xhpingcdn.com"

_VIDEO_PATH_RE = re.compile(r'/videos/([^/?#]+)')
_INT_PREFIX_RE = re.compile(r'^\s*([+-]?\d+)')
_CLOCK_RE = re.compile(r'(\d+):(\d+)')
_CDN_ESCAPES = (('(', '%28'), (')', '%29'), (',', '%2C'))


def canonical_path(raw_url: Optional[str]) -> str:
    """
    Reduce a video URL to its short path.

    Args:
        raw_url: Full or relative URL (e.g., https://host/videos/my-slug-1?ref=x)

    Returns:
        Short path (e.g., videos/my-slug-1) or "" when the URL is not a video URL
    """
    if not raw_url:
        return ""
    match = _VIDEO_PATH_RE.search(raw_url)
    return f"videos/{match.group(1)}" if match else ""


def escape_for_cdn(url: Optional[str], cdn_host: str = CDN_HOST) -> Optional[str]:
    """
    Percent-escape the characters the CDN rejects in thumbnail filenames.

    Only URLs served from the CDN host (or one of its subdomains) are touched.
    """
    if not url:
        return url
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return url
    if hostname != cdn_host and not hostname.endswith("." + cdn_host):
        return url
    for char, escaped in _CDN_ESCAPES:
        url = url.replace(char, escaped)
    return url


def parse_int(value) -> Optional[int]:
    """
    Best-effort integer parse.

    Strings parse their leading signed digits ("42 views" -> 42), numbers are
    truncated, anything else gives None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return None
        return int(value)
    if isinstance(value, str):
        match = _INT_PREFIX_RE.match(value)
        return int(match.group(1)) if match else None
    return None


def clock_to_seconds(text: Optional[str]) -> Optional[int]:
    """Convert the first MM:SS found in text to seconds."""
    if not text:
        return None
    match = _CLOCK_RE.search(text)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def first_number(text: Optional[str]) -> Optional[int]:
    """Return the first run of digits in text."""
    if not text:
        return None
    match = re.search(r'(\d+)', text)
    return int(match.group(1)) if match else None


def slug_hash(text: str) -> int:
    """
    32-bit signed string hash: h = h * 31 + unit, wrapping like an int32.

    Iterates UTF-16 code units so the result matches the hash browsers
    compute for the same string. Not cryptographic; collisions are fine.
    """
    data = text.encode('utf-16-le')
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def synthesize_id(
    url: Optional[str],
    unique: bool = False,
    clock: Callable[[], float] = time.time,
) -> Optional[int]:
    """
    Build a fallback id from the last segment of a video URL.

    Args:
        url: Video URL or short path
        unique: Mix in a millisecond timestamp component
        clock: Time source, seconds since epoch

    Returns:
        Non-negative id, or None when the URL has no usable segment
    """
    path = canonical_path(url) or (url or "").split('?', 1)[0].rstrip('/')
    slug = path.rsplit('/', 1)[-1]
    if not slug:
        return None
    value = abs(slug_hash(slug))
    if unique:
        value += int(clock() * 1000) % 1000000
    return value

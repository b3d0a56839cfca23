"""
Recovery of video objects from embedded, not-quite-JSON arrays.

Hydration payloads are JavaScript object literals rather than strict JSON:
keys may be unquoted and trailing commas appear. Three parsers are tried in
order on an array substring; the first one that yields objects wins.
"""

import json
import re
from typing import Any, Dict, List, Optional

from .observer import Observer, notify

_TRAILING_COMMA_OBJECT_RE = re.compile(r',\s*}')
_TRAILING_COMMA_ARRAY_RE = re.compile(r',\s*]')
_UNQUOTED_KEY_RE = re.compile(r'([{,])\s*([a-zA-Z_][a-zA-Z0-9_]*):')

VIDEO_OBJECT_RE = re.compile(
    r'"id":\s*(\d+)[^}]*?"title":\s*"([^"]*)"[^}]*?"pageURL":\s*"([^"]*)"'
    r'[^}]*?"thumbURL":\s*"([^"]*)"[^}]*?"duration":\s*(\d+)[^}]*?"views":\s*(\d+)'
)


def unescape_slashes(value: str) -> str:
    """Undo JSON slash escaping in a raw string capture."""
    return value.replace('\\/', '/')


def quote_keys(text: str) -> str:
    """Quote bare identifier keys following ``{`` or ``,``."""
    return _UNQUOTED_KEY_RE.sub(r'\1"\2":', text)


def repair_json_text(text: str) -> str:
    """Strip trailing commas and quote bare keys."""
    text = _TRAILING_COMMA_ARRAY_RE.sub(']', text)
    text = _TRAILING_COMMA_OBJECT_RE.sub('}', text)
    return quote_keys(text)


def has_identity(obj: Any) -> bool:
    """True for dicts carrying an id, a title and a page URL."""
    return isinstance(obj, dict) and bool(obj.get('id')) and bool(obj.get('title')) \
        and bool(obj.get('pageURL'))


def parse_strict_array(text: str, observer: Optional[Observer] = None) -> Optional[List[Dict[str, Any]]]:
    """
    Repair then parse text as a JSON array.

    Returns:
        Objects with id/title/pageURL, or None when text is not a parseable array
    """
    try:
        data = json.loads(repair_json_text(text.strip()))
    except ValueError as e:
        notify(observer, 'parse_failed', parser='strict', error=str(e))
        return None
    if not isinstance(data, list):
        notify(observer, 'parse_failed', parser='strict', error='not an array')
        return None
    return [item for item in data if has_identity(item)]


def recover_with_regex(text: str) -> List[Dict[str, Any]]:
    """Pick out objects whose six main fields appear in the usual order."""
    videos = []
    for match in VIDEO_OBJECT_RE.finditer(text):
        videos.append({
            'id': int(match.group(1)),
            'title': match.group(2),
            'pageURL': unescape_slashes(match.group(3)),
            'thumbURL': unescape_slashes(match.group(4)),
            'duration': int(match.group(5)),
            'views': int(match.group(6)),
        })
    return videos


def recover_with_brackets(text: str, observer: Optional[Observer] = None) -> List[Dict[str, Any]]:
    """
    Walk text tracking brace depth and string state, parsing every
    top-level ``{...}`` span on its own.
    """
    videos = []
    depth = 0
    start = -1
    in_string = False
    escaped = False

    for i, char in enumerate(text):
        if escaped:
            escaped = False
            continue
        if char == '\\':
            escaped = True
            continue
        if char == '"':
            in_string = not in_string
        if in_string:
            continue

        if char == '{':
            if depth == 0:
                start = i
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0 and start != -1:
                span = text[start:i + 1]
                try:
                    obj = json.loads(quote_keys(span.strip()))
                except ValueError as e:
                    notify(observer, 'parse_failed', parser='brackets', error=str(e))
                else:
                    if has_identity(obj):
                        videos.append(obj)
                start = -1

    return videos


def parse_video_array(text: str, observer: Optional[Observer] = None) -> List[Dict[str, Any]]:
    """
    Recover candidate video objects from an array substring.

    Strict parsing is authoritative when it succeeds; the regex and bracket
    scanners only run when the text cannot be parsed as a whole.
    """
    if not text:
        return []

    videos = parse_strict_array(text, observer)
    if videos is not None:
        notify(observer, 'array_parsed', parser='strict', count=len(videos))
        return videos

    videos = recover_with_regex(text)
    if videos:
        notify(observer, 'array_parsed', parser='regex', count=len(videos))
        return videos

    videos = recover_with_brackets(text, observer)
    notify(observer, 'array_parsed', parser='brackets', count=len(videos))
    return videos

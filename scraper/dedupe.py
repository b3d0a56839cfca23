"""
Duplicate removal for extracted video collections.

Two policies are in use. Related videos only collapse exact repeats of the
(id, title, page_path) triple. Search results are stricter: a record is
dropped as soon as its id, its title or its page path has been seen before.
"""

from typing import List, Optional, Sequence

from .models import VideoRecord
from .observer import Observer, notify


def dedupe_key(record: VideoRecord) -> str:
    return f"{record.id}-{record.title}-{record.page_path}"


def dedupe_exact(records: Sequence[VideoRecord], observer: Optional[Observer] = None) -> List[VideoRecord]:
    """Keep the first record for each composite key, preserving order."""
    unique = []
    seen = set()
    for record in records:
        key = dedupe_key(record)
        if key in seen:
            notify(observer, 'duplicate_skipped', policy='exact', id=record.id, title=record.title)
            continue
        seen.add(key)
        unique.append(record)
    return unique


def dedupe_strict(records: Sequence[VideoRecord], observer: Optional[Observer] = None) -> List[VideoRecord]:
    """Drop records sharing any one of id, title or page path with an earlier record."""
    unique = []
    seen_ids = set()
    seen_titles = set()
    seen_paths = set()
    for record in records:
        if record.id in seen_ids or record.title in seen_titles or record.page_path in seen_paths:
            notify(observer, 'duplicate_skipped', policy='strict', id=record.id, title=record.title)
            continue
        seen_ids.add(record.id)
        seen_titles.add(record.title)
        seen_paths.add(record.page_path)
        unique.append(record)
    return unique

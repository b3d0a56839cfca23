"""
Collection extraction strategies.

Every strategy takes the raw page HTML and returns candidate dicts. The
cascade driver runs them in priority order and keeps the output of the first
one that yields at least one valid record.
"""

import json
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from bs4 import BeautifulSoup

from .cleaner import clean_candidates
from .config import ScraperConfig
from .json_recovery import parse_video_array, repair_json_text, unescape_slashes
from .models import VideoRecord
from .observer import Observer, notify
from .utils import clock_to_seconds, escape_for_cdn, first_number, synthesize_id

Candidates = List[Dict[str, Any]]

SEARCH_RESULT_RE = re.compile(r'"searchResult":\s*({.*?"videoThumbProps":\s*\[.*?\]}),', re.DOTALL)
THUMB_PROPS_RE = re.compile(r'"videoThumbProps":\s*(\[[\s\S]*?\])\s*\}')
RELATED_COMPONENT_RE = re.compile(
    r'"relatedVideosComponent":\s*\{[^}]*"videoTabInitialData":\s*\{[^}]*'
    r'"videoListProps":\s*\{[^}]*"videoThumbProps":\s*(\[[\s\S]*?\])\s*\}'
)
VIDEO_TAB_DATA_RE = re.compile(
    r'"videoTabInitialData":\s*\{[^}]*"videoListProps":\s*\{[^}]*'
    r'"videoThumbProps":\s*(\[[\s\S]*?\])\s*\}'
)

FREE_TEXT_WITH_ID_RE = re.compile(
    r'"id":\s*(\d+)[^}]*?"title":\s*"([^"]*)"[^}]*?"pageURL":\s*"([^"]*)"'
    r'[^}]*?"thumbURL":\s*"([^"]*)"[^}]*?"duration":\s*(\d+)'
)
FREE_TEXT_NO_ID_RE = re.compile(
    r'"title":\s*"([^"]*)"[^}]*?"pageURL":\s*"([^"]*)"[^}]*?"thumbURL":\s*"([^"]*)"'
    r'[^}]*?"duration":\s*(\d+)'
)

SEARCH_CARD_SELECTOR = 'div[class*="video"], article[class*="video"], div[class*="thumb"], div[class*="item"]'
RELATED_CARD_SELECTOR = (
    '.related-video, [class*="related"], [class*="video-item"], .video-thumb, '
    '[class*="thumb"], .video-card, [class*="card"]'
)
CARD_TITLE_SELECTOR = 'h3, h4, a[title], .title, [class*="title"]'
CARD_DURATION_SELECTOR = '.duration, .time, [class*="duration"], [class*="time"]'
CARD_VIEWS_SELECTOR = '.views, [class*="views"]'


@dataclass
class Strategy:
    """A named extraction step."""
    name: str
    run: Callable[[str, Optional[Observer]], Candidates]


@dataclass
class CascadeResult:
    """Valid records from a cascade run and how they were obtained."""
    records: List[VideoRecord]
    method: str
    rejected: int = 0


def script_texts(html: str, marker: str) -> List[str]:
    """Contents of every <script> tag that mentions marker."""
    soup = BeautifulSoup(html, 'html.parser')
    texts = []
    for script in soup.find_all('script'):
        content = script.string or script.get_text()
        if content and marker in content:
            texts.append(content)
    return texts


def _scoped_arrays(
    html: str,
    marker: str,
    pattern: re.Pattern,
    observer: Optional[Observer],
    first_only: bool = False,
) -> Candidates:
    videos = []
    for content in script_texts(html, marker):
        match = pattern.search(content)
        if not match:
            continue
        found = parse_video_array(match.group(1), observer)
        notify(observer, 'scope_parsed', marker=marker, count=len(found))
        videos.extend(found)
        if first_only and videos:
            break
    return videos


# ---------------------------------------------------------------------------
# Script-embedded strategies
# ---------------------------------------------------------------------------

def search_result_json(html: str, observer: Optional[Observer] = None) -> Candidates:
    """The searchResult object of the hydration payload, parsed whole."""
    match = SEARCH_RESULT_RE.search(html)
    if not match:
        return []
    try:
        data = json.loads(repair_json_text(match.group(1)))
    except ValueError as e:
        notify(observer, 'parse_failed', parser='searchResult', error=str(e))
        return []
    videos = data.get('videoThumbProps') if isinstance(data, dict) else None
    if not isinstance(videos, list):
        return []
    return [video for video in videos if isinstance(video, dict)]


def search_script_thumb_props(html: str, observer: Optional[Observer] = None) -> Candidates:
    """First script whose videoThumbProps array yields anything."""
    return _scoped_arrays(html, '"videoThumbProps"', THUMB_PROPS_RE, observer, first_only=True)


def related_component(html: str, observer: Optional[Observer] = None) -> Candidates:
    """relatedVideosComponent -> videoTabInitialData -> videoListProps -> videoThumbProps."""
    return _scoped_arrays(html, '"relatedVideosComponent"', RELATED_COMPONENT_RE, observer)


def video_tab_data(html: str, observer: Optional[Observer] = None) -> Candidates:
    return _scoped_arrays(html, '"videoTabInitialData"', VIDEO_TAB_DATA_RE, observer)


def script_thumb_props(html: str, observer: Optional[Observer] = None) -> Candidates:
    return _scoped_arrays(html, '"videoThumbProps"', THUMB_PROPS_RE, observer)


# ---------------------------------------------------------------------------
# DOM heuristics
# ---------------------------------------------------------------------------

def _card_title(card) -> Optional[str]:
    elem = card.select_one(CARD_TITLE_SELECTOR)
    if elem is None:
        return None
    title = (elem.get('title') or "").strip() or elem.get_text(strip=True)
    return title or None


def _card_link(card) -> Optional[str]:
    for link in card.select('a[href]'):
        href = link['href'].strip()
        if '/videos/' in href:
            return href
    return None


def _card_duration(card) -> Optional[int]:
    for elem in card.select(CARD_DURATION_SELECTOR):
        seconds = clock_to_seconds(elem.get_text(strip=True))
        if seconds is not None:
            return seconds
    return None


def parse_card(card, unique_ids: bool = False, clock: Callable[[], float] = time.time) -> Optional[Dict[str, Any]]:
    """
    Read one rendered video card.

    Returns:
        Candidate dict, or None when the card links to no video page
    """
    page_url = _card_link(card)
    if not page_url:
        return None

    video = {'pageURL': page_url}
    title = _card_title(card)
    if title:
        video['title'] = title

    img = card.select_one('img[src]')
    if img is not None and img['src'].strip():
        video['thumbURL'] = escape_for_cdn(img['src'].strip())

    duration = _card_duration(card)
    if duration:
        video['duration'] = duration

    views_elem = card.select_one(CARD_VIEWS_SELECTOR)
    if views_elem is not None:
        views = first_number(views_elem.get_text(strip=True))
        if views is not None:
            video['views'] = views

    video['id'] = synthesize_id(page_url, unique=unique_ids, clock=clock)
    return video


def _dom_cards(html: str, selector: str, unique_ids: bool, observer: Optional[Observer]) -> Candidates:
    soup = BeautifulSoup(html, 'html.parser')
    cards = soup.select(selector)
    videos = []
    for card in cards:
        video = parse_card(card, unique_ids=unique_ids)
        if video:
            videos.append(video)
    notify(observer, 'dom_cards', selector=selector, cards=len(cards), count=len(videos))
    return videos


def dom_search_cards(html: str, observer: Optional[Observer] = None) -> Candidates:
    """Rendered search result cards; ids mix in a timestamp."""
    return _dom_cards(html, SEARCH_CARD_SELECTOR, True, observer)


def dom_related_cards(html: str, observer: Optional[Observer] = None) -> Candidates:
    """Rendered related-video cards."""
    return _dom_cards(html, RELATED_CARD_SELECTOR, False, observer)


# ---------------------------------------------------------------------------
# Free-text scan
# ---------------------------------------------------------------------------

def free_text_scan(html: str, observer: Optional[Observer] = None) -> Candidates:
    """
    Look for video-shaped field runs anywhere in the document.

    The id-less field order is only tried when no run carrying an id was found.
    """
    videos = []
    for match in FREE_TEXT_WITH_ID_RE.finditer(html):
        page_url = unescape_slashes(match.group(3))
        if '/videos/' in page_url:
            videos.append({
                'id': int(match.group(1)),
                'title': match.group(2),
                'pageURL': page_url,
                'thumbURL': unescape_slashes(match.group(4)),
                'duration': int(match.group(5)),
            })
    if not videos:
        for match in FREE_TEXT_NO_ID_RE.finditer(html):
            page_url = unescape_slashes(match.group(2))
            if '/videos/' in page_url:
                videos.append({
                    'id': synthesize_id(page_url),
                    'title': match.group(1),
                    'pageURL': page_url,
                    'thumbURL': unescape_slashes(match.group(3)),
                    'duration': int(match.group(4)),
                })
    notify(observer, 'free_text_scan', count=len(videos))
    return videos


SEARCH_STRATEGIES = (
    Strategy('searchResult', search_result_json),
    Strategy('scriptVideoThumbProps', search_script_thumb_props),
    Strategy('domCards', dom_search_cards),
    Strategy('freeText', free_text_scan),
)

RELATED_STRATEGIES = (
    Strategy('relatedVideosComponent', related_component),
    Strategy('videoTabInitialData', video_tab_data),
    Strategy('videoThumbProps', script_thumb_props),
    Strategy('domCards', dom_related_cards),
    Strategy('freeText', free_text_scan),
)


def run_cascade(
    strategies: Sequence[Strategy],
    html: str,
    config: Optional[ScraperConfig] = None,
    observer: Optional[Observer] = None,
) -> CascadeResult:
    """
    Run strategies in order and return the first usable output.

    Args:
        strategies: Strategies in priority order
        html: Raw page HTML
        config: ScraperConfig, uses defaults if None
        observer: Diagnostic observer

    Returns:
        CascadeResult; an empty record list when nothing worked
    """
    rejected = 0

    for strategy in strategies:
        notify(observer, 'strategy_started', strategy=strategy.name)
        try:
            candidates = strategy.run(html, observer)
        except Exception as e:
            notify(observer, 'strategy_failed', strategy=strategy.name, error=f"{type(e).__name__}: {e}")
            candidates = []

        records = clean_candidates(candidates, config, observer)
        rejected += len(candidates) - len(records)
        notify(observer, 'strategy_finished', strategy=strategy.name,
               candidates=len(candidates), records=len(records))

        if records:
            return CascadeResult(records, strategy.name, rejected)

    return CascadeResult([], 'none', rejected)

"""Shared pytest fixtures for the scraper and API tests."""

from pathlib import Path
from typing import Callable, Dict

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    """Read an HTML fixture by file name."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def fixture_html() -> Callable[[str], str]:
    """Loader for HTML fixtures in tests/fixtures."""
    return load_fixture


@pytest.fixture
def search_json_html() -> str:
    """Search page whose results live in the searchResult hydration object."""
    return load_fixture("search_json.html")


@pytest.fixture
def search_script_html() -> str:
    """Search page with an unquoted-key videoThumbProps array."""
    return load_fixture("search_script.html")


@pytest.fixture
def search_dom_html() -> str:
    """Search page with rendered cards only."""
    return load_fixture("search_dom.html")


@pytest.fixture
def details_html() -> str:
    """Detail page with a videoModel and a related videos component."""
    return load_fixture("details.html")


@pytest.fixture
def details_markup_html() -> str:
    """Detail page without any hydration payload."""
    return load_fixture("details_markup.html")


@pytest.fixture
def valid_candidate() -> Dict:
    """A candidate that passes every cleaner check."""
    return {
        "id": "4242",
        "title": "  Sample video  ",
        "pageURL": " https://xhamster19.com/videos/sample-video-xh4242?from=search ",
        "thumbURL": "https://thumb-v3.xhpingcdn.com/a/(m=e),320x180.jpg",
        "duration": "95",
        "views": 310,
        "created": 1700000000,
        "videoType": "video",
        "imageURL": "https://thumb-v3.xhpingcdn.com/a/(m=big).jpg",
        "spriteURL": " https://thumb-v3.xhpingcdn.com/sprite.jpg ",
        "trailerURL": "https://video.example/trailer.av1.mp4",
        "trailerFallbackUrl": "https://video.example/trailer.mp4",
        "landing": {"type": "creator", "id": "77", "name": "Creator", "logo": "", "link": "/creators/c"},
        "isThumbCustom": True,
        "userCountry": "de",
        "attributes": {"hd": True},
        "classes": "thumb-big",
    }

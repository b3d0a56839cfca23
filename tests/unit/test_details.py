"""Unit tests for single-video extraction."""

from scraper.details import (
    detail_from_markup,
    detail_from_model,
    extract_stream_url,
    extract_video_details,
    find_video_model,
)
from scraper.observer import RecordingObserver
from scraper.utils import slug_hash

NESTED_MODEL_HTML = (
    '<html><head><meta property="og:title" content="Nested">'
    '<link rel="canonical" href="https://h/videos/nested-xh1"></head><body>'
    '<script>var x={"videoModel":{"id":5,"title":"Nested","rating":{"value":4.5,"count":2},'
    '"author":{"name":"A"}}};</script></body></html>'
)


class TestStreamUrl:
    """Tests for extract_stream_url."""

    def test_preload_link(self, details_html):
        assert extract_stream_url(details_html) == "https://video-a.example.com/main.m3u8?x=1&y=2"

    def test_requires_crossorigin(self):
        assert extract_stream_url('<link rel="preload" href="/font.woff2" as="font">') is None

    def test_empty(self):
        assert extract_stream_url("") is None


class TestVideoModel:
    """Tests for videoModel lookup and mapping."""

    def test_find_flat_model(self, details_html):
        model = find_video_model(details_html)
        assert model["id"] == 777
        assert model["isHD"] is True

    def test_nested_model_does_not_parse(self):
        observer = RecordingObserver()
        assert find_video_model(NESTED_MODEL_HTML, observer) is None
        assert observer.events[-1][0] == "parse_failed"

    def test_detail_from_model(self):
        model = {
            "id": "9",
            "titleLocalized": "Local title",
            "duration": 61,
            "views": None,
            "comments": "4",
            "rating": {"value": "4.5"},
            "pageURL": "https://h/videos/x-9?a=1",
            "thumbURL": "https://thumb-v1.xhpingcdn.com/(t).jpg",
            "downloadFile": "https://h/download/x-9.mp4",
            "author": {"id": 3, "name": " Up ", "pageURL": "https://h/creators/up", "verified": 1},
            "isVR": 1,
        }

        detail = detail_from_model(model, clock=lambda: 1234.9)

        assert detail.id == 9
        assert detail.title == "Local title"
        assert detail.duration_seconds == 61
        assert detail.created_at == 1234
        assert detail.view_count == 0
        assert detail.comment_count == 4
        assert detail.rating_value == 4.5
        assert detail.page_path == "videos/x-9"
        assert detail.thumbnail_url == "https://thumb-v1.xhpingcdn.com/%28t%29.jpg"
        assert detail.download_url == "https://h/download/x-9.mp4"
        assert detail.is_vr is True
        assert detail.is_hd is False
        assert detail.author.name == "Up"
        assert detail.author.page_path == "creators/up"
        assert detail.author.verified is True

    def test_model_defaults(self):
        detail = detail_from_model({}, clock=lambda: 10)

        assert detail.id is None
        assert detail.title == ""
        assert detail.created_at == 10
        assert detail.rating_value == 0
        assert detail.author is None


class TestMarkupFallback:
    """Tests for detail_from_markup."""

    def test_markup_fields(self, details_markup_html):
        detail = detail_from_markup(details_markup_html, clock=lambda: 99)

        assert detail.title == "Fallback Video"
        assert detail.page_path == "videos/fallback-xhABC"
        assert detail.id == abs(slug_hash("fallback-xhABC"))
        assert detail.duration_seconds == 605
        assert detail.view_count == 3210
        assert detail.created_at == 99
        assert detail.description == "Only markup here"
        assert detail.thumbnail_url == "https://thumb-v2.xhpingcdn.com/f/%281%29%2C2.jpg"

    def test_h1_title(self):
        detail = detail_from_markup("<html><body><h1> Heading </h1></body></html>")
        assert detail.title == "Heading"
        assert detail.id is None
        assert detail.page_path == ""

    def test_nothing_identifying(self):
        assert detail_from_markup("<html><body><p>hi</p></body></html>") is None


class TestExtractVideoDetails:
    """Tests for extract_video_details."""

    def test_prefers_video_model(self, details_html):
        observer = RecordingObserver()

        detail = extract_video_details(details_html, observer=observer)

        assert detail.id == 777
        assert detail.view_count == 12345
        assert detail.comment_count == 7
        assert detail.created_at == 1690000000
        assert detail.is_hd is True
        assert detail.thumbnail_url == "https://thumb-v2.xhpingcdn.com/m/%28x%29%2Cy.jpg"
        assert ("detail_extracted", {"source": "videoModel"}) in observer.events

    def test_nested_model_falls_back_to_markup(self):
        detail = extract_video_details(NESTED_MODEL_HTML)
        assert detail.title == "Nested"
        assert detail.page_path == "videos/nested-xh1"
        assert detail.rating_value == 0

    def test_empty_page(self):
        assert extract_video_details("<html></html>") is None

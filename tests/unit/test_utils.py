"""Unit tests for URL normalization, integer parsing and id synthesis."""

import pytest

from scraper.utils import (
    canonical_path,
    clock_to_seconds,
    escape_for_cdn,
    first_number,
    parse_int,
    slug_hash,
    synthesize_id,
)


class TestCanonicalPath:
    """Tests for canonical_path."""

    def test_strips_host_and_query(self):
        assert canonical_path("https://host/videos/my-slug-1?ref=x") == "videos/my-slug-1"

    def test_keeps_only_first_segment(self):
        assert canonical_path("https://host/videos/my-slug-1/comments/2") == "videos/my-slug-1"

    def test_relative_url(self):
        assert canonical_path("/videos/abc-xh1#top") == "videos/abc-xh1"

    @pytest.mark.parametrize("url", ["", None, "https://host/search/cats", "https://host/video/abc", "videos/abc"])
    def test_non_video_urls(self, url):
        assert canonical_path(url) == ""

    @pytest.mark.parametrize("url", [
        "https://host/videos/a-1",
        "https://host/videos/a-1/?x=1",
        "/en/videos/funny-xhAB12/related",
    ])
    def test_idempotent_through_full_url(self, url):
        path = canonical_path(url)
        assert canonical_path(f"https://other-host/{path}") == path


class TestEscapeForCdn:
    """Tests for escape_for_cdn."""

    def test_escapes_cdn_urls(self):
        url = "https://thumb-v1.xhpingcdn.com/a/(m=eaAaaEFx)(mh=x),320x180.jpg"
        assert escape_for_cdn(url) == "https://thumb-v1.xhpingcdn.com/a/%28m=eaAaaEFx%29%28mh=x%29%2C320x180.jpg"

    def test_bare_cdn_host(self):
        assert escape_for_cdn("https://xhpingcdn.com/(a).jpg") == "https://xhpingcdn.com/%28a%29.jpg"

    def test_other_hosts_unchanged(self):
        url = "https://static.example.com/a/(b),c.jpg"
        assert escape_for_cdn(url) == url

    def test_lookalike_host_unchanged(self):
        url = "https://notxhpingcdn.com/(b).jpg"
        assert escape_for_cdn(url) == url

    def test_custom_host(self):
        assert escape_for_cdn("https://img.mycdn.net/(1).jpg", cdn_host="mycdn.net") == "https://img.mycdn.net/%281%29.jpg"

    @pytest.mark.parametrize("url", [
        "https://thumb-v1.xhpingcdn.com/a/(m=e),1.jpg",
        "https://thumb-v1.xhpingcdn.com/a/%28m=e%29.jpg",
        "https://example.com/(x)",
        "",
    ])
    def test_idempotent(self, url):
        once = escape_for_cdn(url)
        assert escape_for_cdn(once) == once

    def test_empty_values_pass_through(self):
        assert escape_for_cdn("") == ""
        assert escape_for_cdn(None) is None


class TestParseInt:
    """Tests for parse_int."""

    @pytest.mark.parametrize("value,expected", [
        (42, 42),
        ("42", 42),
        (" 17 views", 17),
        ("-5", -5),
        (3.9, 3),
        ("12abc", 12),
    ])
    def test_parses(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, [], {}, float("nan")])
    def test_rejects(self, value):
        assert parse_int(value) is None


class TestTextNumbers:
    """Tests for clock_to_seconds and first_number."""

    def test_clock(self):
        assert clock_to_seconds("12:34") == 754
        assert clock_to_seconds("Duration 0:45") == 45

    def test_clock_missing(self):
        assert clock_to_seconds("soon") is None
        assert clock_to_seconds("") is None

    def test_first_number(self):
        assert first_number("1234 views") == 1234
        assert first_number("views: none") is None


class TestSlugHash:
    """Tests for the 32-bit string hash."""

    def test_known_values(self):
        assert slug_hash("") == 0
        assert slug_hash("abc") == 96354
        assert slug_hash("hello") == 99162322

    def test_wraps_to_signed_32_bit(self):
        assert slug_hash("polygenelubricants") == -2147483648

    def test_collisions_are_allowed(self):
        assert slug_hash("Aa") == slug_hash("BB") == 2112

    def test_counts_utf16_code_units(self):
        # U+1F600 is a surrogate pair: 0xD83D, 0xDE00
        assert slug_hash("\U0001F600") == (0xD83D * 31 + 0xDE00)


class TestSynthesizeId:
    """Tests for synthesize_id."""

    def test_uses_last_path_segment(self):
        assert synthesize_id("https://host/videos/hello") == 99162322
        assert synthesize_id("videos/hello") == 99162322

    def test_ignores_query(self):
        assert synthesize_id("https://host/videos/hello?ref=1") == 99162322

    def test_absolute_value(self):
        assert synthesize_id("https://host/videos/polygenelubricants") == 2147483648

    def test_unique_mixes_in_clock(self):
        value = synthesize_id("videos/hello", unique=True, clock=lambda: 1700000000.123)
        assert value == 99162322 + (1700000000123 % 1000000)

    def test_missing_segment(self):
        assert synthesize_id("") is None
        assert synthesize_id(None) is None

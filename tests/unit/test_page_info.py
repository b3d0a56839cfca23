"""Unit tests for pagination and metadata extraction."""

from scraper.config import ScraperConfig
from scraper.models import PageMetadata, PaginationInfo
from scraper.page_info import extract_metadata, extract_pagination


class TestExtractPagination:
    """Tests for extract_pagination."""

    def test_paginator(self, search_json_html):
        assert extract_pagination(search_json_html) == PaginationInfo(
            current_page=2, total_pages=12, has_next=True, has_previous=True,
        )

    def test_no_paginator(self, search_dom_html):
        assert extract_pagination(search_dom_html) == PaginationInfo()

    def test_first_page(self):
        html = (
            '<a class="xh-paginator-button active" data-page="1">1</a>'
            '<a class="xh-paginator-button" data-page="2">2</a>'
            '<div class="next"><a data-page="next">Next</a></div>'
        )
        assert extract_pagination(html) == PaginationInfo(
            current_page=1, total_pages=2, has_next=True, has_previous=False,
        )

    def test_non_numeric_pages_are_ignored(self):
        html = '<a class="xh-paginator-button active" data-page="x">?</a>'
        assert extract_pagination(html) == PaginationInfo()


class TestExtractMetadata:
    """Tests for extract_metadata."""

    def test_open_graph_and_twitter(self, details_html):
        metadata = extract_metadata(details_html)

        assert metadata.title == "Main Video"
        assert metadata.description == "A description"
        assert metadata.site_name == "VideoSite"
        assert metadata.type == "video.other"
        assert metadata.twitter_card == "summary_large_image"
        assert metadata.twitter_site == "@videosite"
        assert metadata.twitter_creator == "@uploader"

    def test_urls_are_normalized(self, details_html):
        metadata = extract_metadata(details_html)

        assert metadata.image == "https://thumb-v2.xhpingcdn.com/m/%28x%29%2Cy.jpg"
        assert metadata.url == "videos/main-video-xhMAIN1"
        assert metadata.canonical == "videos/main-video-xhMAIN1"
        assert metadata.amp_url == "videos/main-video-xhMAIN1"

    def test_image_left_alone_for_other_cdn(self, details_html):
        metadata = extract_metadata(details_html, config=ScraperConfig(cdn_host="mycdn.net"))
        assert metadata.image == "https://thumb-v2.xhpingcdn.com/m/(x),y.jpg"

    def test_missing_tags(self):
        assert extract_metadata("<html><head></head></html>") == PageMetadata()

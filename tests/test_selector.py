"""
Tests for selectors and extractors.
"""
import pytest
from bs4 import BeautifulSoup

from content_fields.exceptions import ConfigurationError
from content_fields.models.enums import ElementOutput, SelectorSource
from content_fields.models.extractor import FieldExtractor, apply_extractors
from content_fields.models.selector import FieldSelector

HTML_SAMPLE = """
<!DOCTYPE html>
<html>
<head>
    <meta property="og:title" content="Meta Title">
    <meta name="Author" content="Jane Doe">
</head>
<body>
    <h1 class="title">Page Title</h1>
    <div class="byline">By <a href="/author/jane">Jane</a> today</div>
    <time datetime="2024-01-15T10:00:00">January 15, 2024</time>
    <div class="content">
        <p>First <b>bold</b> paragraph.</p>
        <p>Second paragraph. <span class="ad">Buy now</span></p>
        <p></p>
    </div>
    <div class="hero" style="color: red; background-image: url('/img/hero.jpg');"></div>
    <img class="cover" src="/img/cover.jpg" srcset="/img/cover-400.jpg 400w, /img/cover-800.jpg 800w">
    <img class="plain" src="/img/plain.jpg?w=300">
</body>
</html>
"""


@pytest.fixture
def soup():
    return BeautifulSoup(HTML_SAMPLE, "lxml")


class TestFieldSelector:
    """Test selector construction and matching."""

    def test_plain_string(self, soup):
        selector = FieldSelector.from_dict("h1.title")
        assert selector.source == SelectorSource.PAGE
        assert selector.output == ElementOutput.TEXT
        assert selector.select(soup) == ["Page Title"]

    def test_first_match_only_by_default(self, soup):
        selector = FieldSelector.from_dict("div.content p")
        assert selector.select(soup) == ["First bold paragraph."]

    def test_multiple(self, soup):
        selector = FieldSelector.from_dict({"expr": "div.content p", "multiple": True})
        # The empty paragraph is dropped
        assert selector.select(soup) == ["First bold paragraph.", "Second paragraph. Buy now"]

    def test_caller_default_for_multiple(self, soup):
        selector = FieldSelector.from_dict("div.content p")
        assert len(selector.find(soup, multiple=True)) == 3
        assert len(FieldSelector.from_dict({"expr": "div.content p", "multiple": False}).find(soup, multiple=True)) == 1

    def test_separator_joins_matches(self, soup):
        selector = FieldSelector.from_dict({"expr": "div.content p", "multiple": True, "separator": " | "})
        assert selector.select(soup) == ["First bold paragraph. | Second paragraph. Buy now"]

    def test_excludes_are_stripped(self, soup):
        selector = FieldSelector.from_dict({"expr": "div.content p", "multiple": True, "exclude": "span.ad"})
        assert selector.select(soup) == ["First bold paragraph.", "Second paragraph."]
        # The document is not modified
        assert soup.select_one("span.ad") is not None

    def test_attribute(self, soup):
        selector = FieldSelector.from_dict({"expr": "time", "attribute": "datetime"})
        assert selector.select(soup) == ["2024-01-15T10:00:00"]

    def test_missing_attribute(self, soup):
        selector = FieldSelector.from_dict({"expr": "h1", "attribute": "data-id"})
        assert selector.select(soup) == []

    def test_html_output(self, soup):
        selector = FieldSelector.from_dict({"expr": "div.content p", "output": "html"})
        assert selector.select(soup) == ["First <b>bold</b> paragraph."]

    def test_own_text_output(self, soup):
        selector = FieldSelector.from_dict({"expr": "div.byline", "output": "own-text"})
        assert selector.select(soup) == ["By today"]

    def test_meta_source(self, soup):
        selector = FieldSelector.from_dict({"expr": "og:title", "source": "meta"})
        assert selector.select(soup.body) == ["Meta Title"]

    def test_meta_name_is_case_insensitive(self, soup):
        selector = FieldSelector.from_dict({"expr": "author", "source": "meta"})
        assert selector.select(soup) == ["Jane Doe"]

    def test_meta_not_found(self, soup):
        selector = FieldSelector.from_dict({"expr": "og:image", "source": "meta"})
        assert selector.select(soup) == []

    def test_root_expression(self, soup):
        content = soup.select_one("div.byline")
        selector = FieldSelector.from_dict("<root>")
        assert selector.is_root()
        assert selector.find(content) == [content]
        assert selector.select(content) == ["By Jane today"]

    def test_background_image(self, soup):
        selector = FieldSelector.from_dict({"expr": "div.hero", "background": True})
        assert selector.select(soup) == ["/img/hero.jpg"]

    def test_srcset_size(self, soup):
        selector = FieldSelector.from_dict({"expr": "img.cover", "size": "800w"})
        assert selector.select(soup) == ["/img/cover-800.jpg"]

    def test_image_field_reads_first_srcset_entry(self, soup):
        selector = FieldSelector.from_dict("img.cover")
        assert selector.select(soup, image=True) == ["/img/cover-400.jpg"]

    def test_image_field_falls_back_to_src(self, soup):
        selector = FieldSelector.from_dict("img.plain")
        assert selector.select(soup, image=True) == ["/img/plain.jpg?w=300"]

    def test_invalid_expression(self):
        with pytest.raises(ConfigurationError):
            FieldSelector.from_dict("h1[")

    def test_empty_expression(self):
        with pytest.raises(ConfigurationError):
            FieldSelector.from_dict("  ")

    def test_meta_expression_is_not_compiled(self):
        selector = FieldSelector.from_dict({"expr": "article:published_time", "source": "meta"})
        assert selector.compiled is None


class TestFieldExtractor:
    """Test regular expression extractors."""

    def test_plain_string_uses_first_group(self):
        extractor = FieldExtractor.from_dict("Published: (.+)")
        assert extractor.format == "$1"
        assert extractor.extract("Published: Jan 15, 2024") == "Jan 15, 2024"

    def test_only_the_match_is_replaced(self):
        extractor = FieldExtractor.from_dict({"expr": "By (\\w+)", "format": "$1"})
        assert extractor.extract("Written By Jane on Monday") == "Written Jane on Monday"

    def test_format_reorders_groups(self):
        extractor = FieldExtractor.from_dict({"expr": "(\\d+) (\\w+) (\\d{4})", "format": "$2 $1, $3"})
        assert extractor.extract("15 January 2024") == "January 15, 2024"

    def test_match_all(self):
        extractor = FieldExtractor.from_dict({"expr": "-", "format": " ", "match": "all"})
        assert extractor.extract("a-b-c") == "a b c"

    def test_match_first(self):
        extractor = FieldExtractor.from_dict({"expr": "-", "format": " "})
        assert extractor.extract("a-b-c") == "a b-c"

    def test_no_match_drops_candidate(self):
        extractor = FieldExtractor.from_dict("Published: (.+)")
        assert extractor.extract("Updated yesterday") is None

    def test_validator(self):
        extractor = FieldExtractor.from_dict({"expr": ".*?(\\d+).*", "validator": "Price"})
        assert extractor.extract("Cost 5 dollars") is None
        assert extractor.extract("Price 5 dollars") == "5"

    def test_properties(self):
        extractor = FieldExtractor.from_dict({"expr": "Day (\\d+)", "format": "${year}-01-$1"})
        assert extractor.extract("Day 12", {"year": 2024}) == "2024-01-12"

    def test_empty_format_deletes_match(self):
        extractor = FieldExtractor.from_dict({"expr": "\\s*\\|.*", "format": "", "match": "all"})
        assert extractor.format == ""
        assert extractor.extract("Hello World | Example News") == "Hello World"

    def test_property_value_is_not_a_group_reference(self):
        extractor = FieldExtractor.from_dict({"expr": "Price (\\d+)", "format": "${currency}$1"})
        assert extractor.extract("Price 5", {"currency": "$"}) == "$5"
        assert extractor.extract("Price 5", {"currency": "$1"}) == "$15"

    def test_backslash_in_format_is_literal(self):
        extractor = FieldExtractor.from_dict({"expr": "(\\w+)", "format": "\\$1"})
        assert extractor.extract("word") == "\\word"

    def test_invalid_expression(self):
        with pytest.raises(ConfigurationError):
            FieldExtractor.from_dict("([a-z]")

    def test_apply_extractors_in_order(self):
        extractors = [
            FieldExtractor.from_dict("Published: (.+)"),
            FieldExtractor.from_dict({"expr": "(\\w+) (\\d+)", "format": "$2 $1"}),
        ]
        assert apply_extractors(extractors, ["Published: Jan 15", "Draft"]) == ["15 Jan"]

    def test_apply_without_extractors(self):
        assert apply_extractors([], ["a", "", "b"]) == ["a", "b"]

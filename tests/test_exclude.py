"""
Tests for exclude rules.
"""
import pytest
from bs4 import BeautifulSoup, Comment

from content_fields.models.exclude import FieldExclude, apply_excludes, parse_exclude, strip_excludes

HTML_SAMPLE = """
<article>
    <div class="content">
        <p>Keep this paragraph.</p>
        <div class="ad promo">Buy now</div>
        <span class="ad">Sponsored</span>
        <div id="newsletter">Subscribe</div>
        <!-- tracking -->
    </div>
</article>
"""


@pytest.fixture
def soup():
    return BeautifulSoup(HTML_SAMPLE, "lxml")


class TestParseExclude:
    @pytest.mark.parametrize(
        "expr, expected",
        [
            ("div.card", ("div", "card", "")),
            ("span#hero", ("span", "", "hero")),
            ("p", ("p", "", "")),
            (".ad", ("", "ad", "")),
            ("#main", ("", "", "main")),
        ],
    )
    def test_parse(self, expr, expected):
        assert parse_exclude(expr) == expected

    def test_parsed_once_at_construction(self):
        exclude = FieldExclude.from_dict("div.card")
        assert (exclude.tag, exclude.class_name, exclude.id) == ("div", "card", "")

    def test_detailed_mapping(self):
        exclude = FieldExclude.from_dict({"expr": "span#hero"})
        assert (exclude.tag, exclude.class_name, exclude.id) == ("span", "", "hero")

    def test_only_expression_is_serialised(self):
        assert FieldExclude.from_dict("div.card").to_dict() == {"expr": "div.card"}


class TestApplyExcludes:
    def test_class_among_several(self, soup):
        excludes = [FieldExclude.from_dict("div.ad")]
        assert apply_excludes(excludes, soup.select_one("div.promo"))

    def test_other_class_or_tag(self, soup):
        excludes = [FieldExclude.from_dict("div.ad")]
        assert not apply_excludes(excludes, soup.select_one("div.content"))
        assert not apply_excludes(excludes, soup.select_one("span.ad"))

    def test_rules_are_ored(self, soup):
        excludes = [FieldExclude.from_dict("div.ad"), FieldExclude.from_dict("div#newsletter")]
        assert apply_excludes(excludes, soup.select_one("#newsletter"))

    def test_class_only_rule(self, soup):
        excludes = [FieldExclude.from_dict(".ad")]
        assert apply_excludes(excludes, soup.select_one("span.ad"))
        assert apply_excludes(excludes, soup.select_one("div.ad"))

    def test_non_element_nodes_never_match(self, soup):
        excludes = [FieldExclude.from_dict("p")]
        text = soup.select_one("p").string
        comment = soup.find(string=lambda s: isinstance(s, Comment))
        assert not apply_excludes(excludes, text)
        assert not apply_excludes(excludes, comment)

    def test_no_excludes(self, soup):
        assert not apply_excludes([], soup.select_one("div.ad"))


class TestStripExcludes:
    def test_strips_descendants_from_copy(self, soup):
        content = soup.select_one("div.content")
        stripped = strip_excludes(content, [FieldExclude.from_dict(".ad")])

        assert stripped.select(".ad") == []
        assert "Keep this paragraph." in stripped.get_text()
        # The document itself is untouched
        assert len(content.select(".ad")) == 2

    def test_without_excludes_returns_node(self, soup):
        content = soup.select_one("div.content")
        assert strip_excludes(content, ()) is content

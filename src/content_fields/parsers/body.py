"""
Body formatting.

BodyParser walks the content element of a page and flattens it into a list
of BodyElement blocks (paragraphs, headings, list items, quotes, ...),
merging inline runs of text into the block they belong to. The blocks are
then rendered either as simplified body markup or as a plain-text summary,
with the BODY and SUMMARY filters of the body field applied per block.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, List, Optional, Union

from bs4 import Comment, NavigableString, Tag

from ..models.enums import FilterResult, FilterScope
from ..models.exclude import FieldExclude, apply_excludes
from ..models.filter import FieldFilter, apply_filters
from ..settings import settings
from ..utils.normalization import normalize_soup

__all__ = ("BodyElement", "BodyParser", "ElementDisplay", "ElementType")

log = logging.getLogger(__name__)

BR = "<br>"

HEADING_RE = re.compile(r"^h[1-6]$")
TIMESTAMP_RE = re.compile(r"^\s*\d{1,2}:\d{2}[\s|-]+.*")
URL_RE = re.compile(r"(?:https?://|www\.)\S+", re.IGNORECASE)

LEAF_TAGS = frozenset(("p", "blockquote", "pre", "li", "table", "figure", "iframe"))
BLOCK_TAGS = LEAF_TAGS | frozenset(("ul", "ol", "aside"))
STRONG_TAGS = frozenset(("strong", "b"))
TEXT_TAG = "#text"


class ElementType(str, Enum):
    TEXT = "text"
    TITLE = "title"
    QUOTE = "quote"
    PRE = "pre"
    LIST = "list"
    TABLE = "table"
    FIGURE = "figure"
    IFRAME = "iframe"
    TIMESTAMP = "timestamp"


class ElementDisplay(str, Enum):
    INLINE = "inline"
    INLINE_BLOCK = "inline-block"
    BLOCK = "block"


def is_heading(tag: str) -> bool:
    return HEADING_RE.match(tag) is not None


def is_block_tag(tag: str) -> bool:
    return tag in BLOCK_TAGS or is_heading(tag)


def is_leaf_tag(tag: str) -> bool:
    return tag in LEAF_TAGS or is_heading(tag)


class BodyElement:
    """One block of body text, with the tag it came from."""

    def __init__(self, tag: str, text: str, strong: bool = False):
        self.tag = tag
        self.strong = strong
        self.list_type: Optional[str] = None
        self.display = ElementDisplay.BLOCK if is_block_tag(tag) else ElementDisplay.INLINE
        self.has_br = False

        if text.startswith(BR):
            self.has_br = True
            text = text[len(BR):].strip()
        self.type = self._get_type(tag, text)
        self._text = text

    @staticmethod
    def _get_type(tag: str, text: str) -> ElementType:
        if is_heading(tag):
            return ElementType.TITLE
        if tag == "blockquote":
            return ElementType.QUOTE
        if tag == "pre":
            return ElementType.PRE
        if tag in ("ul", "ol", "li"):
            return ElementType.LIST
        if tag == "table":
            return ElementType.TABLE
        if tag == "figure":
            return ElementType.FIGURE
        if tag == "iframe":
            return ElementType.IFRAME
        if TIMESTAMP_RE.match(text):
            return ElementType.TIMESTAMP
        return ElementType.TEXT

    @property
    def text(self) -> str:
        return self._text

    def is_block(self) -> bool:
        return self.display in (ElementDisplay.BLOCK, ElementDisplay.INLINE_BLOCK)

    def append(self, other: Union["BodyElement", str]) -> None:
        """Append text, separated by a space when it starts with a word character."""
        text = other.text if isinstance(other, BodyElement) else other
        if not text:
            return

        has_br = text.startswith(BR)
        if has_br:
            text = text[len(BR):]

        if self._text and text[:1].isalnum() and (not self._text.endswith("\n") or has_br):
            if has_br:
                self.append_br()
            self._text += " "
        self._text += text

    def append_br(self) -> None:
        self._text += BR

    def __repr__(self) -> str:
        return f"BodyElement(tag={self.tag!r}, type={self.type.value}, strong={self.strong}, text={self._text[:40]!r})"


class BodyParser:
    """
    Flattens body markup into BodyElement blocks and formats them.

    Args:
        excludes: Rules for nodes skipped while walking the tree.
        filters: The body field filters, applied with the BODY scope by
            format_body() and the SUMMARY scope by format_summary().
    """

    def __init__(
        self,
        excludes: Optional[Iterable[FieldExclude]] = None,
        filters: Optional[Iterable[FieldFilter]] = None,
    ):
        self.excludes = tuple(excludes or ())
        self.filters = tuple(filters or ())
        self.elements: List[BodyElement] = []
        self._previous: Optional[BodyElement] = None

    @classmethod
    def from_markup(cls, markup: str, filters: Optional[Iterable[FieldFilter]] = None) -> "BodyParser":
        """Parse a body string; text without paragraph markup is split on blank lines."""
        parser = cls(filters=filters)
        if "<p" not in markup:
            markup = text_to_html(markup)
        soup = normalize_soup(markup, settings.HTML_PARSER)
        parser.parse(soup.body or soup)
        return parser

    def parse(self, node: Tag) -> List[BodyElement]:
        """Collect the blocks below node, appending to any already collected."""
        for child in node.children:
            self._parse_node(child)
        log.debug("Parsed %d body element(s)", len(self.elements))
        return self.elements

    def parse_and_format(self, node: Tag) -> str:
        self.parse(node)
        return self.format_body()

    def _parse_node(self, node) -> None:
        if isinstance(node, Comment) or apply_excludes(self.excludes, node):
            return

        if isinstance(node, NavigableString):
            self._add_leaf(node, TEXT_TAG)
        elif isinstance(node, Tag):
            children = node.contents
            if (
                not children
                or (len(children) == 1 and isinstance(children[0], NavigableString))
                or is_leaf_tag(node.name)
            ):
                self._add_leaf(node, node.name)
            else:
                for child in children:
                    self._parse_node(child)

    def _add_leaf(self, node, tag: str) -> None:
        text = get_block_text(node).strip()
        if tag == "p":
            text = re.sub(r"\n(.+)", r"\n" + BR + r"\1", text)

        inline = not (not self.elements or (self._previous is not None and self._previous.display == ElementDisplay.BLOCK))
        strings = [clean_text(s) for s in text.split("\n")]
        strong = sum(1 for s in strings if s) == 1 and is_strong(node)

        last = len(strings) - 1
        for i, string in enumerate(strings):
            if not string:
                if i == last and self._previous is not None:
                    self._previous.display = ElementDisplay.BLOCK
                continue

            element = BodyElement(tag, string, strong)
            if i > 0 or not inline:
                element.display = ElementDisplay.INLINE_BLOCK
            if element.type == ElementType.LIST and node.parent is not None:
                element.list_type = node.parent.name

            previous = self._previous
            if previous is not None and not element.is_block():
                previous.append(element)
            elif (
                previous is not None
                and element.has_br
                and (i == 0 or (strings[i - 1] and strings[i - 1] != BR and element.type != ElementType.TIMESTAMP))
            ):
                previous.append("\n")
                previous.append_br()
                previous.append(element)
            else:
                # A strong block that is not a sentence, followed by another block, is a title
                if (
                    previous is not None
                    and previous.type == ElementType.TEXT
                    and previous.strong
                    and not previous.text.endswith(".")
                    and previous.is_block()
                    and element.is_block()
                ):
                    previous.type = ElementType.TITLE
                self._previous = element
                self.elements.append(element)

    def format_body(self) -> str:
        """
        Render the blocks as simplified markup.

        A block matched by a skip filter is left out; a stop filter ends the
        body at that block.
        """
        lines = []
        list_type = None
        for element in self.elements:
            text = element.text
            result = apply_filters(self.filters, text, FilterScope.BODY)
            if result == FilterResult.SKIP:
                continue
            if result == FilterResult.STOP:
                break

            if element.type == ElementType.LIST:
                if list_type is None and element.list_type:
                    list_type = element.list_type
                    lines.append(f"<p><{list_type}>")
                lines.append(f"<{element.tag}>{text}")
                continue

            if list_type is not None:
                lines.append(f"</{list_type}></p>")
                list_type = None

            if element.strong:
                lines.append(f"<strong>{text}</strong>")
            elif element.type == ElementType.TITLE:
                lines.append(f"<{element.tag}>{text}</{element.tag}>")
            else:
                lines.append(f"<p>{text}</p>")

        if list_type is not None:
            lines.append(f"</{list_type}></p>")
        return "\n".join(lines)

    def format_summary(self, min_length: Optional[int] = None, max_length: Optional[int] = None) -> str:
        """
        Build a plain-text summary from the leading text blocks.

        Leading titles and non-text blocks are passed over. The summary ends
        at the first title after some text, before a block that would take
        it over max_length, or once it is longer than min_length.
        """
        min_length = settings.SUMMARY_MIN_LENGTH if min_length is None else min_length
        max_length = settings.SUMMARY_MAX_LENGTH if max_length is None else max_length

        summary = ""
        header = None
        for element in self.elements:
            if element.type == ElementType.TITLE:
                if header is None:
                    header = True
            elif element.type == ElementType.TEXT:
                header = False

            if element.type not in (ElementType.TEXT, ElementType.TITLE) or (
                header and element.type == ElementType.TITLE
            ):
                continue

            text = element.text.replace("\n", "").replace(BR, "")
            text = re.sub(r"\[.+\]", "", text)
            text = re.sub(r"_{2,}", "", text)

            result = apply_filters(self.filters, text, FilterScope.SUMMARY)
            if result == FilterResult.SKIP:
                continue
            if result == FilterResult.STOP:
                break

            if URL_RE.search(text):
                text = remove_urls(text)
                if not text:
                    continue

            if element.type == ElementType.TITLE:
                break

            if text.startswith(("#", "~", "_", "=")) or "\u25ac" in text:
                continue

            if summary and len(summary) + len(text) > max_length:
                break

            if summary and text:
                summary += " "
            summary += text

            if len(summary) > min_length:
                break

        if summary.endswith(":"):
            summary = summary[:-1] + "."
        return summary


def get_block_text(node) -> str:
    """Text of a node with <br> tags turned into line breaks."""
    if isinstance(node, NavigableString):
        return str(node)
    parts = []
    for child in node.descendants:
        if isinstance(child, Tag) and child.name == "br":
            parts.append("\n")
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            parts.append(str(child))
    return "".join(parts)


def clean_text(text: str) -> str:
    text = text.replace("\u00a0", " ")
    text = re.sub("[\u2005\u2009\u202f]", " ", text)
    text = re.sub(r"(\w+) +([.?!])", r"\1\2", text)
    text = re.sub(r" {2,}", " ", text)
    return text.strip()


def is_strong(node) -> bool:
    """True if the node is, or a paragraph that starts with, <strong> or <b>."""
    if not isinstance(node, Tag):
        return False
    if node.name in STRONG_TAGS:
        return True
    if node.name != "p":
        return False
    for child in node.contents:
        if isinstance(child, Tag) and child.name == "br":
            continue
        if isinstance(child, NavigableString) and not child.strip():
            continue
        return isinstance(child, Tag) and child.name in STRONG_TAGS
    return False


def remove_urls(text: str) -> str:
    return re.sub(r" {2,}", " ", URL_RE.sub("", text)).strip()


def text_to_html(text: str) -> str:
    """Wrap blank-line separated paragraphs of plain text in <p> tags."""
    paragraphs = [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]
    return "".join(f"<p>{p}</p>" for p in paragraphs)

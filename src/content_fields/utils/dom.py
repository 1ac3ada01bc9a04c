"""
Helpers for reading values out of BeautifulSoup elements.
"""
from __future__ import annotations

import re
from typing import List, Optional

from bs4 import Comment, NavigableString, Tag

from .normalization import normalize_str

__all__ = (
    "document_of",
    "get_background_image",
    "get_inner_html",
    "get_meta_content",
    "get_own_text",
    "get_srcset_url",
    "get_text",
)

_BACKGROUND_IMAGE_RE = re.compile(r"background(?:-image)?\s*:[^;]*?url\(\s*(.+?)\s*\)", re.IGNORECASE | re.DOTALL)
_META_ATTRS = ("property", "name", "itemprop")


def get_text(element: Tag) -> str:
    """Rendered text of an element and its descendants, whitespace collapsed."""
    return normalize_str(element.get_text())


def get_own_text(element: Tag) -> str:
    """Text of the element's direct text children only."""
    strings = [
        str(child)
        for child in element.children
        if isinstance(child, NavigableString) and not isinstance(child, Comment)
    ]
    return normalize_str(" ".join(strings))


def get_inner_html(element: Tag) -> str:
    return element.decode_contents().strip()


def get_meta_content(document: Tag, value: str) -> Optional[str]:
    """Content of the first <meta> tag whose property, name or itemprop equals value."""
    value = value.lower()
    for meta in document.find_all("meta"):
        if not isinstance(meta, Tag):
            continue
        attrs = {str(k).lower(): v for k, v in meta.attrs.items()}
        for key in _META_ATTRS:
            meta_value = attrs.get(key)
            if meta_value and str(meta_value).lower() == value:
                content = meta.get("content")
                if content:
                    return content.strip()
    return None


def get_background_image(element: Tag) -> Optional[str]:
    """URL of a background-image declared in the element's style attribute."""
    style = (element.get("style") or "").strip()
    if not style:
        return None
    m = _BACKGROUND_IMAGE_RE.search(style)
    if m:
        return m.group(1).strip("\"' ")
    return None


def get_srcset_url(srcset: str, size: Optional[str] = None) -> Optional[str]:
    """
    Pick a URL from a srcset attribute: the entry with the given descriptor
    (e.g. "2x" or "800w") when present, otherwise the first entry.
    """
    urls: List[str] = []
    sizes = {}
    for item in srcset.split(","):
        item = item.strip()
        if not item:
            continue
        url, _, descriptor = item.partition(" ")
        urls.append(url)
        if descriptor.strip():
            sizes[descriptor.strip()] = url
    if size and size in sizes:
        return sizes[size]
    return urls[0] if urls else None


def document_of(node: Tag) -> Tag:
    """The top-most ancestor of a node, normally the BeautifulSoup document."""
    top = node
    while top.parent is not None:
        top = top.parent
    return top

from __future__ import annotations

import re
from typing import Optional, Union
from urllib.parse import urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup, Tag

from ..settings import settings

_QUERY_RE = re.compile(r"[?#].*$", re.DOTALL)


def normalize_soup(markup: Union[Tag, str, bytes], features: Optional[str] = None) -> Tag:
    if isinstance(markup, Tag):
        return markup

    if isinstance(markup, bytes):
        markup = markup.decode("utf-8", errors="ignore")
    return BeautifulSoup(markup, features or settings.HTML_PARSER)


def normalize_str(value: Optional[Union[str, bytes]]) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if not isinstance(value, str) or not value:
        return ""
    s = re.sub(r"\s+", " ", value)
    return s.strip()


def get_base_path(url: Optional[str]) -> str:
    """Return the scheme and host of a URL, e.g. https://example.com"""
    if not url:
        return ""
    p = urlparse(url.strip())
    if not p.scheme or not p.netloc:
        return ""
    return urlunparse((p.scheme, p.netloc, "", "", "", ""))


def is_relative_url(url: str) -> bool:
    return not urlparse(url).scheme and not url.startswith("//")


def format_url(
    url: Optional[str],
    base_path: Optional[str] = None,
    remove_parameters: bool = True,
    trailing_slash: bool = False,
) -> str:
    """
    Normalise an extracted URL.

    Spaces are encoded, a leading "../" is dropped, the query string and
    fragment are removed when remove_parameters is set, relative URLs are
    resolved against base_path and protocol-relative URLs get "https:".
    A trailing slash is then removed, or added when trailing_slash is set.
    """
    if not url:
        return ""

    url = url.strip().replace(" ", "%20")
    if url.startswith("../"):
        url = url[2:]

    if remove_parameters:
        url = _QUERY_RE.sub("", url)

    if base_path and is_relative_url(url):
        url = urljoin(base_path.rstrip("/") + "/", url)
    elif url.startswith("//"):
        url = "https:" + url

    p = urlparse(url)
    path = p.path
    if trailing_slash:
        if not path.endswith("/"):
            path += "/"
    elif len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/")
    return urlunparse(p._replace(path=path))

from __future__ import annotations

from .aliases import AliasGenerator
from .dom import (
    document_of,
    get_background_image,
    get_inner_html,
    get_meta_content,
    get_own_text,
    get_srcset_url,
    get_text,
)
from .normalization import (
    format_url,
    get_base_path,
    is_relative_url,
    normalize_soup,
    normalize_str,
)
from .text import (
    capitalize_fully,
    check_expression,
    compile_expression,
    to_replacement,
)

__all__ = (
    "AliasGenerator",
    "capitalize_fully",
    "document_of",
    "check_expression",
    "compile_expression",
    "format_url",
    "get_background_image",
    "get_base_path",
    "get_inner_html",
    "get_meta_content",
    "get_own_text",
    "get_srcset_url",
    "get_text",
    "is_relative_url",
    "normalize_soup",
    "normalize_str",
    "to_replacement",
)

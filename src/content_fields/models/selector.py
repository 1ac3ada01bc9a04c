from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import soupsieve
from bs4 import Tag
from pydantic import Field, StrictBool, StrictStr, field_validator, model_validator

from ..utils.dom import (
    document_of,
    get_background_image,
    get_inner_html,
    get_meta_content,
    get_own_text,
    get_srcset_url,
    get_text,
)
from .base import RuleModel
from .enums import ElementOutput, SelectorSource
from .exclude import FieldExclude, strip_excludes

__all__ = ("ROOT_EXPR", "FieldSelector")

log = logging.getLogger(__name__)

ROOT_EXPR = "<root>"

_IMAGE_ATTRIBUTES = ("srcset", "data-srcset")
_SOURCE_ATTRIBUTES = ("src", "data-src")


class FieldSelector(RuleModel):
    """
    Where a field value is found in a document and how it is read.

    Page selectors are CSS expressions evaluated below the scoped node, and
    the expression "<root>" stands for the scoped node itself. Meta selectors
    read the content of the <meta> tag whose property, name or itemprop equals
    the expression.

    Examples:
        "h1.title"
        {"expr": "og:title", "source": "meta"}
        {"expr": "time", "attribute": "datetime"}
        {"expr": "article p", "multiple": true, "separator": " ", "exclude": "span.ad"}
        {"expr": "div.hero", "background": true}
        {"expr": "figure img", "size": "800w"}
    """

    expr: StrictStr = Field(description="CSS expression, meta key or <root>.")
    source: SelectorSource = Field(default=SelectorSource.PAGE)
    output: ElementOutput = Field(default=ElementOutput.TEXT, description="How a matched element is rendered.")
    attribute: Optional[StrictStr] = Field(default=None, description="Read this attribute instead of the content.")
    multiple: Optional[StrictBool] = Field(default=None, description="Use every match instead of only the first.")
    separator: Optional[StrictStr] = Field(default=None, description="Join the matches into one value.")
    excludes: Tuple[FieldExclude, ...] = Field(default=(), description="Sub-nodes stripped before reading.")
    size: Optional[StrictStr] = Field(default=None, description="Preferred srcset descriptor, e.g. 2x or 800w.")
    background: StrictBool = Field(default=False, description="Read the URL of a background-image style.")

    @model_validator(mode="before")
    @classmethod
    def _merge_excludes(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        excludes = cls.to_list(data.pop("exclude", None)) + cls.to_list(data.pop("excludes", None))
        if excludes:
            data["excludes"] = tuple(excludes)
        return data

    @field_validator("expr")
    @classmethod
    def _check_expr(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Selector expression must not be empty")
        return value

    @model_validator(mode="after")
    def _compile_expr(self) -> "FieldSelector":
        if self.source == SelectorSource.PAGE and not self.is_root():
            try:
                soupsieve.compile(self.expr)
            except soupsieve.SelectorSyntaxError as e:
                raise ValueError(f"Invalid selector expression {self.expr!r}: {e}") from e
        return self

    @property
    def compiled(self) -> Optional[soupsieve.SoupSieve]:
        if self.source == SelectorSource.META or self.is_root():
            return None
        return soupsieve.compile(self.expr)

    def is_root(self) -> bool:
        return self.expr == ROOT_EXPR

    def is_multiple(self, default: bool = False) -> bool:
        return default if self.multiple is None else self.multiple

    def find(self, node: Tag, multiple: Optional[bool] = None) -> List[Tag]:
        """
        Elements matching the expression below node, in document order.

        Only the first match is returned unless the selector (or, when it
        does not say, the caller's default) asks for every match.
        """
        if self.source == SelectorSource.META:
            return []
        if self.is_root():
            return [node]

        if self.is_multiple(bool(multiple)):
            return list(self.compiled.select(node))
        element = self.compiled.select_one(node)
        return [element] if element is not None else []

    def select(
        self,
        node: Tag,
        document: Optional[Tag] = None,
        multiple: Optional[bool] = None,
        image: bool = False,
    ) -> List[str]:
        """
        Raw string values for this selector, in document order.

        Empty values are dropped. With a separator the values are joined into
        a single one. For image fields the srcset entry matching size (or the
        first entry, or the src attribute) is read from each element.
        """
        if self.source == SelectorSource.META:
            content = get_meta_content(document if document is not None else document_of(node), self.expr)
            log.debug("Meta selector %r: %r", self.expr, content)
            return [content] if content else []

        values = []
        for element in self.find(node, multiple):
            value = self._read(strip_excludes(element, self.excludes), image)
            if value:
                values.append(value)

        log.debug("Selector %r matched %d value(s)", self.expr, len(values))
        if self.separator is not None and values:
            return [self.separator.join(values)]
        return values

    def _read(self, element: Tag, image: bool) -> Optional[str]:
        if self.attribute:
            value = element.get(self.attribute)
            if isinstance(value, list):
                value = " ".join(value)
            return value.strip() if value else None

        if self.background:
            return get_background_image(element)

        if image or self.size:
            for name in _IMAGE_ATTRIBUTES:
                srcset = element.get(name)
                if srcset:
                    return get_srcset_url(srcset, self.size)
            for name in _SOURCE_ATTRIBUTES:
                src = element.get(name)
                if src:
                    return src.strip()
            return None

        if self.output == ElementOutput.HTML:
            return get_inner_html(element)
        if self.output == ElementOutput.OWN_TEXT:
            return get_own_text(element)
        return get_text(element)

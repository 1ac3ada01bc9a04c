from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple

from bs4 import Tag
from pydantic import Field as PydanticField
from pydantic import StrictBool, StrictStr, model_validator

from ..exceptions import DateParseError
from ..utils.dom import document_of
from ..utils.normalization import format_url, get_base_path
from ..utils.text import capitalize_fully
from .base import BaseModel
from .condition import FieldCondition
from .enums import FieldCase, FilterResult, FilterScope
from .extractor import FieldExtractor, apply_extractors
from .filter import FieldFilter, apply_filters
from .result import FieldResult
from .selector import FieldSelector

__all__ = ("BODY", "IMAGE_FIELDS", "LIST_KEYS", "URL_FIELDS", "Field")

log = logging.getLogger(__name__)

BODY = "body"
IMAGE_FIELDS = ("image",)
URL_FIELDS = ("url", "author-link", "image", "background-image")

# Singular and plural config keys merged into one tuple.
LIST_KEYS = {
    "selectors": ("selector", "selectors"),
    "extractors": ("extractor", "extractors"),
    "date_patterns": ("date-pattern", "date-patterns", "date_pattern", "date_patterns"),
    "filters": ("filter", "filters"),
    "conditions": ("condition", "conditions"),
}


class Field(BaseModel):
    """
    The rules that locate, transform and validate one value of a page.

    A field is configured as a mapping or, when a single selector is all it
    needs, as the selector expression itself:

        title: "h1.entry-title"

        published-date:
          selectors:
            - {expr: "article:published_time", source: meta}
            - {expr: "time", attribute: datetime}
          extractor: "(\\d{4}-\\d{2}-\\d{2})"
          date-patterns: ["%Y-%m-%d"]

    Fields are immutable once built; use derive() for site-level overrides.
    """

    name: StrictStr = PydanticField(default="", description="Slot name, set by the enclosing rule set.")
    selectors: Tuple[FieldSelector, ...] = PydanticField(default=())
    extractors: Tuple[FieldExtractor, ...] = PydanticField(default=())
    text_case: FieldCase = PydanticField(default=FieldCase.NONE)
    date_patterns: Tuple[StrictStr, ...] = PydanticField(default=(), description="strptime formats, tried in order.")
    filters: Tuple[FieldFilter, ...] = PydanticField(default=())
    conditions: Tuple[FieldCondition, ...] = PydanticField(default=())
    base_path: StrictStr = PydanticField(default="", description="Base URL relative values are resolved against.")
    remove_parameters: StrictBool = PydanticField(default=True, description="Strip query string and fragment.")
    trailing_slash: StrictBool = PydanticField(default=False, description="Enforce, rather than remove, a trailing slash.")
    optional: StrictBool = PydanticField(default=False, description="Absence is expected and not logged.")

    @model_validator(mode="before")
    @classmethod
    def _decode_field(cls, data: Any) -> Any:
        if isinstance(data, (str, list, tuple)):
            return {"selectors": tuple(cls.to_list(data))}
        if not isinstance(data, Mapping):
            return data

        data = dict(data)
        for key, aliases in LIST_KEYS.items():
            values = []
            present = False
            for alias in aliases:
                if alias in data:
                    present = True
                    values.extend(cls.to_list(data.pop(alias)))
            if present:
                data[key] = tuple(values)
        return data

    @model_validator(mode="after")
    def _check_selectors(self) -> "Field":
        if not self.selectors and not self.optional:
            raise ValueError(f"Field {self.name or '<unnamed>'} requires at least one selector unless optional")
        return self

    def has_selectors(self) -> bool:
        return bool(self.selectors)

    def has_extractors(self) -> bool:
        return bool(self.extractors)

    def has_conditions(self) -> bool:
        return bool(self.conditions)

    def has_date_patterns(self) -> bool:
        return bool(self.date_patterns)

    def is_url(self) -> bool:
        return self.name in URL_FIELDS or bool(self.base_path)

    def is_image(self) -> bool:
        return self.name in IMAGE_FIELDS

    def is_body(self) -> bool:
        return self.name == BODY

    def format_case(self, value: str) -> str:
        if self.text_case == FieldCase.UPPER:
            return value.upper()
        if self.text_case == FieldCase.LOWER:
            return value.lower()
        if self.text_case == FieldCase.CAPITALIZE:
            return capitalize_fully(value)
        return value

    def parse_date(self, value: str) -> datetime:
        """
        Parse value with the first date pattern that accepts it.

        Raises:
            DateParseError: If no pattern accepts the value.
        """
        for pattern in self.date_patterns:
            try:
                return datetime.strptime(value, pattern)
            except ValueError:
                continue
        raise DateParseError(self.name, value, self.date_patterns)

    def format_url(self, value: str, base_url: Optional[str] = None) -> str:
        return format_url(
            value,
            base_path=self.base_path or get_base_path(base_url),
            remove_parameters=self.remove_parameters,
            trailing_slash=self.trailing_slash,
        )

    def candidates(
        self,
        node: Tag,
        document: Optional[Tag] = None,
        properties: Optional[Mapping[str, object]] = None,
    ) -> List[str]:
        """
        Extracted values of the first selector that matches, before filtering
        and post-processing. Empty if no selector matches or the extractors
        drop every value of the matching one.
        """
        document = document if document is not None else document_of(node)
        for selector in self.selectors:
            raw = selector.select(node, document, multiple=self.is_body(), image=self.is_image())
            if raw:
                return apply_extractors(self.extractors, raw, properties)
        return []

    def evaluate(
        self,
        node: Tag,
        document: Optional[Tag] = None,
        base_url: Optional[str] = None,
        scope: FilterScope = FilterScope.TEXT,
        properties: Optional[Mapping[str, object]] = None,
    ) -> FieldResult:
        """
        Evaluate the field against node.

        Selectors are tried in order and the first one with a surviving value
        wins. Each candidate goes through the extractors, the filters for
        scope, the text case, date parsing and URL normalisation, in that
        order. A stop filter aborts the field; an unparseable date makes it
        invalid unless the field is optional.
        """
        document = document if document is not None else document_of(node)
        for selector in self.selectors:
            raw = selector.select(node, document, multiple=self.is_body(), image=self.is_image())
            values = []
            for candidate in apply_extractors(self.extractors, raw, properties):
                result = apply_filters(self.filters, candidate, scope)
                if result == FilterResult.STOP:
                    log.info("Field %s stopped by filter: %.60r", self.name, candidate)
                    return FieldResult.stopped(self.name)
                if result == FilterResult.SKIP:
                    continue

                value = self.format_case(candidate)
                if self.has_date_patterns():
                    try:
                        value = self.parse_date(value).isoformat()
                    except DateParseError as e:
                        if self.optional:
                            log.debug("Optional field %s: %s", self.name, e)
                            continue
                        log.warning(str(e))
                        return FieldResult.invalid(self.name, e)

                if self.is_url():
                    value = self.format_url(value, base_url)
                if value:
                    values.append(value)

            if values:
                log.debug("Field %s found %d value(s) with selector %r", self.name, len(values), selector.expr)
                return FieldResult.found(self.name, values)

        if not self.optional:
            log.warning("Field %s not found", self.name)
        return FieldResult.missing(self.name)


from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Union

from bs4 import BeautifulSoup, Tag

from ..models.condition import accept_conditions
from ..models.enums import FilterScope, SelectorSource
from ..models.field import Field
from ..models.fields import Fields
from ..models.result import FieldResult, FieldsResult
from ..models.selector import FieldSelector
from ..utils.normalization import normalize_soup
from .body import BodyParser

__all__ = ("FieldsParser", "get_parsed_fields")

log = logging.getLogger(__name__)


class FieldsParser:
    """
    Evaluates a Fields rule set against one parsed page.

    The document is narrowed to the root selector, the validator field
    decides whether the page is processed at all, and every other present
    slot is then evaluated independently below the root.
    """

    def __init__(
        self,
        soup: Union[Tag, str, bytes],
        fields: Fields,
        base_url: Optional[str] = None,
        properties: Optional[Mapping[str, object]] = None,
    ):
        if not isinstance(fields, Fields):
            raise TypeError("`fields` must be a Fields instance.")

        self.soup = normalize_soup(soup)
        self.fields = fields
        self.base_url = base_url
        self.properties = properties
        self._root: Optional[Tag] = None

    @property
    def root(self) -> Optional[Tag]:
        """The content area of the page, the whole document without a root selector."""
        if self._root is None:
            self._root = find_root(self.soup, self.fields.root)
        return self._root

    def validate(self) -> Optional[str]:
        """
        Check the page against the validator field.

        Returns:
            None if the page should be processed, otherwise the reason it is rejected.
        """
        if self.root is None:
            return "root not found"
        if not self.fields.has_validator():
            return None

        validator = self.fields.validator
        values = validator.candidates(self.root, self.soup, self.properties)
        if not values:
            return "validator not found"

        if validator.has_conditions() and not accept_conditions(validator.conditions, values[0]):
            return f"validator rejected by conditions: {values[0]!r}"
        return None

    def parse_field(self, name: str) -> FieldResult:
        """Evaluate one present slot below the root."""
        field = self.fields.get_field(name)
        if field is None or not field.has_selectors():
            raise KeyError(f"Field not configured: {name}")
        if self.root is None:
            return FieldResult.missing(name)
        if field.is_body():
            return self.parse_body(field)
        return field.evaluate(self.root, self.soup, self.base_url, FilterScope.TEXT, self.properties)

    def parse_body(self, field: Field) -> FieldResult:
        """
        Format the elements of the first body selector that matches.

        Meta selectors have no markup to format and are evaluated as text
        with the BODY filter scope.
        """
        if self.root is None:
            return FieldResult.missing(field.name)
        for selector in field.selectors:
            if selector.source == SelectorSource.META:
                result = field.evaluate(self.root, self.soup, self.base_url, FilterScope.BODY, self.properties)
                if result.is_found:
                    return result
                continue

            values = []
            for element in selector.find(self.root, multiple=True):
                text = BodyParser(selector.excludes, field.filters).parse_and_format(element)
                if text:
                    values.append(text)
            if values:
                joined = (selector.separator if selector.separator is not None else "\n").join(values)
                return FieldResult.found(field.name, [joined])

        if not field.optional:
            log.warning("Field %s not found", field.name)
        return FieldResult.missing(field.name)

    def parse_summary(self, min_length: Optional[int] = None, max_length: Optional[int] = None) -> Optional[str]:
        """Build a summary of the body with the SUMMARY filter scope, None without a body."""
        if self.root is None or not self.fields.has_body():
            return None

        body = self.fields.body
        for selector in body.selectors:
            if selector.source == SelectorSource.META:
                continue
            elements = selector.find(self.root, multiple=True)
            if not elements:
                continue

            parser = BodyParser(selector.excludes, body.filters)
            for element in elements:
                parser.parse(element)
            summary = parser.format_summary(min_length, max_length)
            if summary:
                return summary
        return None

    def parse(self) -> FieldsResult:
        reason = self.validate()
        if reason is not None:
            log.info("Page rejected: %s", reason)
            return FieldsResult.reject(reason)

        results: Dict[str, FieldResult] = {}
        for name, field in self.fields.present():
            if name == "validator":
                continue
            results[name] = self.parse_field(name)
        return FieldsResult(fields=results)


def find_root(soup: Tag, selector: Optional[FieldSelector]) -> Optional[Tag]:
    if selector is None:
        return soup
    elements = selector.find(soup)
    return elements[0] if elements else None


def get_parsed_fields(
    html: Union[str, bytes, BeautifulSoup],
    fields: Fields,
    base_url: Optional[str] = None,
) -> FieldsResult:
    """
    High-level function to take raw HTML and a Fields rule set and return
    the extracted values.
    """
    return FieldsParser(html, fields, base_url).parse()

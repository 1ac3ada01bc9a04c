from __future__ import annotations

import logging
import re
from typing import Iterable, List, Mapping, Optional, Pattern

from pydantic import Field, PrivateAttr, StrictStr, field_validator

from ..settings import settings
from ..utils.text import compile_expression, to_replacement
from .base import RuleModel
from .enums import FieldMatch

__all__ = ("FieldExtractor", "apply_extractors")

log = logging.getLogger(__name__)

DEFAULT_FORMAT = "$1"


class FieldExtractor(RuleModel):
    """
    A regular expression that narrows a raw selector string.

    The expression is searched in the candidate and the match is replaced
    with the format template ("$1" by default, i.e. the first capture group).
    With match "all" every occurrence is replaced, otherwise only the first.
    A candidate in which the expression is not found is dropped, as is one
    that does not contain the optional validator expression.

    Examples:
        "Published: (.+)"
        {"expr": "(\\d+) (\\w+) (\\d{4})", "format": "$2 $1, $3"}
        {"expr": "\\s*\\|.*", "format": "", "match": "all"}
    """

    expr: StrictStr = Field(default="", description="Regular expression searched in the candidate.")
    format: StrictStr = Field(default=DEFAULT_FORMAT, description="Replacement template for the match.")
    match: FieldMatch = Field(default=FieldMatch.FIRST, description="Replace the first match or all matches.")
    validator: StrictStr = Field(default="", description="Expression the candidate must contain to be kept.")

    _pattern: Optional[Pattern[str]] = PrivateAttr(default=None)
    _validator_pattern: Optional[Pattern[str]] = PrivateAttr(default=None)

    @field_validator("expr", "validator")
    @classmethod
    def _check_expr(cls, value: str) -> str:
        compile_expression(value, settings.MAX_EXPRESSION_LENGTH)
        return value

    def model_post_init(self, __context) -> None:
        self._pattern = compile_expression(self.expr, settings.MAX_EXPRESSION_LENGTH)
        self._validator_pattern = compile_expression(self.validator, settings.MAX_EXPRESSION_LENGTH)

    @property
    def pattern(self) -> Optional[Pattern[str]]:
        return self._pattern

    def has_expr(self) -> bool:
        return bool(self.expr)

    def extract(self, text: str, properties: Optional[Mapping[str, object]] = None) -> Optional[str]:
        """
        Narrow text, returning None when the candidate should be dropped.

        Properties fill ${name} placeholders in the format template.
        """
        if self._validator_pattern is not None and not self._validator_pattern.search(text):
            log.debug("Extractor validator %r not found in: %.60r", self.validator, text)
            return None

        if self._pattern is None:
            return text

        if not self._pattern.search(text):
            log.debug("Extractor %r found no match in: %.60r", self.expr, text)
            return None

        replacement = to_replacement(self.format or "", properties)
        count = 0 if self.match == FieldMatch.ALL else 1
        try:
            return self._pattern.sub(replacement, text, count=count).strip()
        except (IndexError, re.error) as e:
            log.warning("Extractor %r cannot apply format %r: %s", self.expr, self.format, e)
            return None


def apply_extractors(
    extractors: Optional[Iterable[FieldExtractor]],
    candidates: Iterable[str],
    properties: Optional[Mapping[str, object]] = None,
) -> List[str]:
    """
    Apply the extractors, in declaration order, to each candidate in turn.
    A candidate any extractor drops is removed from the result.
    """
    extractors = tuple(extractors or ())
    results = []
    for candidate in candidates:
        value: Optional[str] = candidate
        for extractor in extractors:
            value = extractor.extract(value, properties)
            if value is None:
                break
        if value:
            results.append(value)
    return results

from __future__ import annotations

import logging
from typing import Iterable, Optional, Pattern

from pydantic import Field, PrivateAttr, StrictBool, StrictStr, field_validator

from ..settings import settings
from ..utils.text import compile_expression
from .base import RuleModel
from .enums import FilterResult, FilterScope

__all__ = ("FieldFilter", "apply_filters")

log = logging.getLogger(__name__)


class FieldFilter(RuleModel):
    """
    A regular expression that suppresses text fragments during extraction.

    A filter whose expression matches the whole text either skips the
    current candidate or, when stop is set, aborts the extraction it is
    part of. The expression is compiled when the filter is built, with
    "." matching newlines; an empty expression makes the filter inert.

    Examples:
        "(?i)advertisement.*"
        {"expr": "(?i)related posts.*", "scope": "body", "stop": true}
    """

    expr: StrictStr = Field(default="", description="Regular expression matched against the whole text.")
    scope: FilterScope = Field(default=FilterScope.ALL, description="Extraction phase the filter applies to.")
    stop: StrictBool = Field(default=False, description="Abort instead of skipping when the filter matches.")

    _pattern: Optional[Pattern[str]] = PrivateAttr(default=None)

    @field_validator("expr")
    @classmethod
    def _check_expr(cls, value: str) -> str:
        compile_expression(value, settings.MAX_EXPRESSION_LENGTH)
        return value

    def model_post_init(self, __context) -> None:
        self._pattern = compile_expression(self.expr, settings.MAX_EXPRESSION_LENGTH)

    @property
    def pattern(self) -> Optional[Pattern[str]]:
        return self._pattern

    def has_expr(self) -> bool:
        return bool(self.expr)

    def matches(self, text: str) -> bool:
        return self._pattern is not None and self._pattern.fullmatch(text) is not None

    def applies(self, scope: FilterScope) -> bool:
        return self.scope == FilterScope.ALL or self.scope == scope


def apply_filters(filters: Optional[Iterable[FieldFilter]], text: str, scope: FilterScope) -> FilterResult:
    """
    Evaluate the filters against text for the given extraction phase.

    Every filter is visited in order. A whole-string match sets the result to
    STOP for a stop filter and SKIP otherwise, but once the result is STOP a
    later match cannot turn it back into SKIP. Returns NONE if nothing matched.
    """
    result = FilterResult.NONE
    for f in filters or ():
        if f.applies(scope) and f.has_expr():
            if f.matches(text) and result != FilterResult.STOP:
                result = FilterResult.STOP if f.stop else FilterResult.SKIP

    if result != FilterResult.NONE:
        log.debug("Filter result %s for %s text: %.60r", result, scope, text)
    return result

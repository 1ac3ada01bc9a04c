from __future__ import annotations

import logging
from typing import Iterable, Optional, Pattern

from pydantic import Field, PrivateAttr, StrictStr, field_validator

from ..settings import settings
from ..utils.text import compile_expression
from .base import RuleModel
from .enums import ConditionAction

__all__ = ("FieldCondition", "accept_conditions")

log = logging.getLogger(__name__)


class FieldCondition(RuleModel):
    """
    A regular expression that decides whether a page or node is processed.

    Examples:
        "(?i).*webinar.*"
        {"expr": "(?i).*sponsored.*", "action": "reject"}
    """

    expr: StrictStr = Field(default="", description="Regular expression matched against the whole text.")
    action: ConditionAction = Field(default=ConditionAction.ACCEPT, description="Outcome when the expression matches.")

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


def accept_conditions(conditions: Optional[Iterable[FieldCondition]], text: str) -> bool:
    """
    Decide whether text is accepted by the conditions.

    The first condition whose expression matches the whole text decides:
    ACCEPT gives True, REJECT gives False, and no further condition is
    looked at. If none matches the text is rejected.
    """
    for condition in conditions or ():
        if not condition.has_expr():
            continue
        if condition.matches(text):
            log.debug("Condition %r matched, action=%s", condition.expr, condition.action)
            return condition.action == ConditionAction.ACCEPT
    return False

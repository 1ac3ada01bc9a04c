"""
Closed value sets used by the field rules.

The members carry no behaviour: filter, condition and selector evaluation
switch on them in one place each (see filter.py, condition.py, selector.py).
Config values are matched case-insensitively and "_" is accepted for "-",
so "OWN_TEXT", "own_text" and "own-text" are the same output mode.
"""
from __future__ import annotations

from enum import Enum

__all__ = (
    "ConditionAction",
    "ElementOutput",
    "FieldCase",
    "FieldMatch",
    "FilterResult",
    "FilterScope",
    "SelectorSource",
)


class _ConfigEnum(str, Enum):
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == key:
                    return member
        return None

    def __str__(self) -> str:
        return self.value


class ConditionAction(_ConfigEnum):
    ACCEPT = "accept"
    REJECT = "reject"


class FilterScope(_ConfigEnum):
    """
    The extraction phase a filter applies to.

    - ALL: every phase
    - TEXT: single-value fields (title, author, dates, ...)
    - BODY: each element of a formatted body
    - SUMMARY: each element considered for a body summary
    """
    ALL = "all"
    TEXT = "text"
    BODY = "body"
    SUMMARY = "summary"


class FilterResult(_ConfigEnum):
    NONE = "none"
    SKIP = "skip"
    STOP = "stop"


class ElementOutput(_ConfigEnum):
    HTML = "html"
    TEXT = "text"
    OWN_TEXT = "own-text"


class FieldCase(_ConfigEnum):
    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"
    CAPITALIZE = "capitalize"


class FieldMatch(_ConfigEnum):
    FIRST = "first"
    ALL = "all"


class SelectorSource(_ConfigEnum):
    PAGE = "page"
    META = "meta"

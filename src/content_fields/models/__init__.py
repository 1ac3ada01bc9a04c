from __future__ import annotations

from .base import BaseModel, RuleModel
from .condition import FieldCondition, accept_conditions
from .enums import (
    ConditionAction,
    ElementOutput,
    FieldCase,
    FieldMatch,
    FilterResult,
    FilterScope,
    SelectorSource,
)
from .exclude import FieldExclude, apply_excludes, strip_excludes
from .extractor import FieldExtractor, apply_extractors
from .field import Field
from .fields import FIELD_NAMES, Fields
from .filter import FieldFilter, apply_filters
from .result import FieldResult, FieldsResult, FieldStatus
from .selector import ROOT_EXPR, FieldSelector

__all__ = (
    "BaseModel",
    "ConditionAction",
    "ElementOutput",
    "FIELD_NAMES",
    "Field",
    "FieldCase",
    "FieldCondition",
    "FieldExclude",
    "FieldExtractor",
    "FieldFilter",
    "FieldMatch",
    "FieldResult",
    "FieldSelector",
    "FieldStatus",
    "Fields",
    "FieldsResult",
    "FilterResult",
    "FilterScope",
    "ROOT_EXPR",
    "RuleModel",
    "SelectorSource",
    "accept_conditions",
    "apply_excludes",
    "apply_extractors",
    "apply_filters",
    "strip_excludes",
)

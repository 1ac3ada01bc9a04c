"""
Content Fields
"""
__version__ = "0.1.0"

from .config import load_fields, merge_config
from .exceptions import ConfigurationError, ContentFieldsError, DateParseError, ExtractionError
from .models import (
    Field,
    FieldCondition,
    FieldExclude,
    FieldExtractor,
    FieldFilter,
    FieldResult,
    Fields,
    FieldSelector,
    FieldsResult,
    FieldStatus,
    FilterResult,
    FilterScope,
)
from .parsers import BodyParser, FieldsParser, get_parsed_fields
from .presets import GENERIC_FIELDS, WORDPRESS_FIELDS

__all__ = [
    "BodyParser",
    "ConfigurationError",
    "ContentFieldsError",
    "DateParseError",
    "ExtractionError",
    "Field",
    "FieldCondition",
    "FieldExclude",
    "FieldExtractor",
    "FieldFilter",
    "FieldResult",
    "FieldSelector",
    "FieldStatus",
    "Fields",
    "FieldsParser",
    "FieldsResult",
    "FilterResult",
    "FilterScope",
    "GENERIC_FIELDS",
    "WORDPRESS_FIELDS",
    "get_parsed_fields",
    "load_fields",
    "merge_config",
]

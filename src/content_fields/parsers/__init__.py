from __future__ import annotations

from .base import FieldsParser, get_parsed_fields
from .body import BodyElement, BodyParser

__all__ = ("BodyElement", "BodyParser", "FieldsParser", "get_parsed_fields")

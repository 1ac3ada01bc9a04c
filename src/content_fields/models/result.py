from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field as PydanticField

from ..exceptions import DateParseError, ExtractionError
from .base import BaseModel
from .enums import _ConfigEnum

__all__ = ("FieldStatus", "FieldResult", "FieldsResult")


class FieldStatus(_ConfigEnum):
    """
    Outcome of evaluating one field.

    - FOUND: at least one value survived
    - MISSING: no selector produced a surviving value
    - STOPPED: a stop filter matched, the field is reported missing
    - INVALID: a value could not be converted, e.g. an unparseable date
    """
    FOUND = "found"
    MISSING = "missing"
    STOPPED = "stopped"
    INVALID = "invalid"


class FieldResult(BaseModel):
    name: str = ""
    status: FieldStatus = FieldStatus.MISSING
    values: List[str] = PydanticField(default_factory=list)
    error: Optional[ExtractionError] = PydanticField(default=None, exclude=True)

    @classmethod
    def found(cls, name: str, values: List[str]) -> "FieldResult":
        return cls(name=name, status=FieldStatus.FOUND, values=list(values))

    @classmethod
    def missing(cls, name: str) -> "FieldResult":
        return cls(name=name, status=FieldStatus.MISSING)

    @classmethod
    def stopped(cls, name: str) -> "FieldResult":
        return cls(name=name, status=FieldStatus.STOPPED)

    @classmethod
    def invalid(cls, name: str, error: ExtractionError) -> "FieldResult":
        return cls(name=name, status=FieldStatus.INVALID, error=error)

    @property
    def value(self) -> Optional[str]:
        """The first surviving value, None unless the field was found."""
        return self.values[0] if self.values else None

    @property
    def is_found(self) -> bool:
        return self.status == FieldStatus.FOUND

    @property
    def is_missing(self) -> bool:
        """Stopped and invalid fields are reported missing as well."""
        return self.status != FieldStatus.FOUND

    def to_dict(self, **kwargs: Any) -> Dict[str, Any]:
        data = super().to_dict(**kwargs)
        data["value"] = self.value
        if self.error is not None:
            data["error"] = str(self.error)
        return data


class FieldsResult(BaseModel):
    """
    Values extracted from one page, keyed by slot name ("title",
    "published-date", ...).

    A rejected page carries the reason and no field results.
    """

    fields: Dict[str, FieldResult] = PydanticField(default_factory=dict)
    rejected: bool = False
    reason: Optional[str] = None

    @classmethod
    def reject(cls, reason: str) -> "FieldsResult":
        return cls(rejected=True, reason=reason)

    def __getitem__(self, name: str) -> FieldResult:
        return self.fields[name]

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def get(self, name: str) -> Optional[str]:
        """The value of a slot, None if it is absent or was not found."""
        result = self.fields.get(name)
        return result.value if result is not None else None

    @property
    def errors(self) -> List[ExtractionError]:
        return [result.error for result in self.fields.values() if result.error is not None]

    def raise_for_errors(self) -> None:
        """
        Raise the first date parsing error of the page, if any.

        Raises:
            DateParseError: If a field value could not be parsed as a date.
        """
        for error in self.errors:
            if isinstance(error, DateParseError):
                raise error

    def to_dict(self, **kwargs: Any) -> Dict[str, Any]:
        return {
            "rejected": self.rejected,
            "reason": self.reason,
            "fields": {name: result.to_dict(**kwargs) for name, result in self.fields.items()},
        }

from __future__ import annotations

import json
from typing import Any, ClassVar, Type, TypeVar

import yaml
from pydantic import BaseModel as _BaseModel
from pydantic import ConfigDict, ValidationError, model_validator

from ..exceptions import ConfigurationError
from ..utils.aliases import AliasGenerator

__all__ = ("BaseModel", "RuleModel")

T = TypeVar("T", bound="BaseModel")


class BaseModel(_BaseModel):
    """
    Immutable rule model.

    Field names are exposed under kebab-case aliases ("text-case",
    "remove-parameters") to match rule documents; the snake_case names
    are accepted as well. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=AliasGenerator.to_kebab_case,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        arbitrary_types_allowed=True,
    )

    @classmethod
    def from_string(cls: Type[T], value: str | bytes) -> T:
        if isinstance(value, bytes):
            value = value.decode("utf-8")

        if isinstance(value, str):
            try:
                data = json.loads(value)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Cannot parse JSON string to {cls.__name__}: {e}") from e
            return cls.from_dict(data)

        raise ConfigurationError(f"Input must be a valid JSON string or bytes, not {type(value).__name__}")

    @classmethod
    def from_yaml(cls: Type[T], value: str | bytes) -> T:
        try:
            data = yaml.safe_load(value)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse YAML document to {cls.__name__}: {e}") from e
        return cls.from_dict(data if data is not None else {})

    @classmethod
    def from_kwargs(cls: Type[T], **kwargs: Any) -> T:
        try:
            return cls.model_validate(kwargs)
        except ValidationError as e:
            raise ConfigurationError(f"Cannot parse kwargs to {cls.__name__}: {e}") from e

    @classmethod
    def from_dict(cls: Type[T], data: dict | Any) -> T:
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Cannot parse {type(data).__name__} to {cls.__name__}: {e}") from e

    def to_dict(self, **kwargs: Any) -> dict[str, Any]:
        kwargs.setdefault("by_alias", True)
        kwargs.setdefault("mode", "json")
        return self.model_dump(**kwargs)

    def to_json(self, **kwargs: Any) -> str:
        kwargs.setdefault("by_alias", True)
        return self.model_dump_json(**kwargs)

    def derive(self: T, **changes: Any) -> T:
        """
        Return a validated copy with the given fields replaced, leaving this
        rule untouched.
        """
        data = self.model_dump(by_alias=False)
        data.update(changes)
        return type(self).from_dict(data)

    @classmethod
    def to_list(cls, obj: Any) -> list[Any]:
        if obj is None:
            return []
        return list(obj) if isinstance(obj, (list, tuple)) else [obj]


class RuleModel(BaseModel):
    """
    A rule configured either as a plain string or as a mapping.

    The plain form is decoded once, before validation, into a mapping
    holding the string under _simple_key.
    """

    _simple_key: ClassVar[str] = "expr"

    @model_validator(mode="before")
    @classmethod
    def _decode_rule_value(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {cls._simple_key: data}
        return data

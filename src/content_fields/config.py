"""
Loading of field rule sets from YAML or JSON documents.

A rule document holds the slot keys either at the top level or under a
"fields" key:

    fields:
      root: "article"
      title: "h1"
      body:
        selector: {expr: "div.entry-content", output: html}

Site-level documents are usually overrides of an organisation-level
template; merge_config() combines the two before the rules are built.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .exceptions import ConfigurationError
from .models.base import BaseModel
from .models.field import LIST_KEYS
from .models.fields import FIELD_NAMES, Fields
from .utils.aliases import AliasGenerator

__all__ = ("load_config", "load_fields", "merge_config")

log = logging.getLogger(__name__)

FIELDS_KEY = "fields"


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML or JSON rule document into a mapping.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or does not hold a mapping.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read rule document {path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse rule document {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Rule document {path} must hold a mapping, not {type(data).__name__}")

    log.debug("Loaded rule document %s", path)
    return data


def merge_config(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge two rule mappings without modifying either.

    Nested mappings are merged key by key; any other value in override,
    lists included, replaces the one in base. A None value removes the key.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_fields_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    The slot mappings of a rule document, with every field in the same
    shape so that overrides merge predictably: slot and rule keys become
    snake_case, single selector and list values become {"selectors": [...]}
    and singular keys become plural.
    """
    fields = data.get(FIELDS_KEY, data)
    if not isinstance(fields, Mapping):
        raise ConfigurationError(f"'{FIELDS_KEY}' must be a mapping, not {type(fields).__name__}")

    normalized: Dict[str, Any] = {}
    for name, value in fields.items():
        if name in FIELD_NAMES or name.replace("_", "-") in FIELD_NAMES:
            name = name.replace("-", "_")
            value = normalize_field(value)
        normalized[name] = value
    return normalized


def normalize_field(value: Any) -> Any:
    if isinstance(value, (str, list, tuple)):
        return {"selectors": BaseModel.to_list(value)}
    if not isinstance(value, Mapping):
        return value

    field: Dict[str, Any] = {}
    for key, item in value.items():
        key = AliasGenerator.to_snake_case(key)
        for name, aliases in LIST_KEYS.items():
            if key in aliases:
                key = name
                item = field.get(name, []) + BaseModel.to_list(item)
                break
        field[key] = item
    return field


def load_fields(
    path: Union[str, Path],
    template: Optional[Union[Fields, Mapping[str, Any]]] = None,
) -> Fields:
    """
    Build a Fields rule set from a rule document.

    Args:
        path: A YAML or JSON file.
        template: Rules the document overrides, as a Fields instance or a
            rule mapping.

    Raises:
        ConfigurationError: If the document cannot be loaded or its rules are invalid.
    """
    data = get_fields_data(load_config(path))
    if template is not None:
        base = get_fields_data(template.to_dict() if isinstance(template, Fields) else template)
        data = merge_config(base, data)
    return Fields.from_dict(data)

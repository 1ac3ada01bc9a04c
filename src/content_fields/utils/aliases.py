from __future__ import annotations

import re


class AliasGenerator:
    @classmethod
    def to_snake_case(cls, name: str) -> str:
        """
        Convert a string to snake_case.
        Reference: https://github.com/pydantic/pydantic/blob/main/pydantic/alias_generators.py
        """
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
        name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
        name = name.replace("-", "_")
        return name.lower()

    @classmethod
    def to_kebab_case(cls, name: str) -> str:
        """Convert a field name to the kebab-case key used in rule documents."""
        return cls.to_snake_case(name).replace("_", "-")

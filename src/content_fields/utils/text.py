"""
Text utilities for field values.

This module provides case conversion, replacement-template conversion and
the regular expression checks applied when rules are loaded.
"""
from __future__ import annotations

import re
from typing import Mapping, Optional, Pattern

__all__ = [
    "capitalize_fully",
    "check_expression",
    "compile_expression",
    "to_replacement",
]

# A quantified group that itself contains a quantifier, e.g. (a+)+ or (\w*\s?)*
_NESTED_QUANTIFIER_RE: Pattern[str] = re.compile(r"\((?:[^()\\]|\\.)*[+*](?:[^()\\]|\\.)*\)(?:[+*]|\{\d*,\d*\})")

_GROUP_REF_RE: Pattern[str] = re.compile(r"\$(\d+)")
_PROPERTY_RE: Pattern[str] = re.compile(r"\$\{([\w-]+)\}")


def capitalize_fully(text: str) -> str:
    """
    Capitalize the first letter of every whitespace-delimited word and
    lowercase the rest.

    Examples:
        >>> capitalize_fully("the QUICK brown-fox")
        'The Quick Brown-fox'
    """
    return " ".join(word.capitalize() for word in text.split(" "))


def check_expression(expr: str, max_length: int) -> str:
    """
    Reject expressions that are too long or contain a nested quantifier,
    the usual source of catastrophic backtracking.

    Raises:
        ValueError: If the expression is unsafe.
    """
    if len(expr) > max_length:
        raise ValueError(f"Expression exceeds {max_length} characters: {expr[:40]}...")
    if _NESTED_QUANTIFIER_RE.search(expr):
        raise ValueError(f"Expression contains a nested quantifier: {expr}")
    return expr


def compile_expression(expr: Optional[str], max_length: int) -> Optional[Pattern[str]]:
    """
    Compile a rule expression with "dot matches newline" semantics.

    Returns None for an empty expression.

    Raises:
        ValueError: If the expression is unsafe or not a valid regular expression.
    """
    if not expr:
        return None
    check_expression(expr, max_length)
    try:
        return re.compile(expr, re.DOTALL)
    except re.error as e:
        raise ValueError(f"Invalid regular expression {expr!r}: {e}") from e


def to_replacement(template: str, properties: Optional[Mapping[str, object]] = None) -> str:
    """
    Convert a replacement template using $1 group references and ${name}
    properties into a template for re.sub. Backslashes are kept literal.

    Examples:
        "$1-$2" becomes "\\g<1>-\\g<2>"
        "${current-year}/$1" with {"current-year": 2024} becomes "2024/\\g<1>"
    """
    template = _GROUP_REF_RE.sub(r"\\g<\1>", template.replace("\\", "\\\\"))
    if properties:
        # Property values are inserted literally, "$1" in a value is not a group reference
        template = _PROPERTY_RE.sub(
            lambda m: str(properties.get(m.group(1), m.group(0))).replace("\\", "\\\\"), template
        )
    return template

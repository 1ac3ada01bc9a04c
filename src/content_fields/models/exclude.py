from __future__ import annotations

import copy
from typing import Iterable, Optional

from bs4 import Tag
from pydantic import Field, StrictStr, model_validator

from .base import RuleModel

__all__ = ("FieldExclude", "apply_excludes", "strip_excludes")


class FieldExclude(RuleModel):
    """
    A tag/class/id rule used to strip unwanted sub-nodes before extraction.

    The expression has the form "tag", "tag.class" or "tag#id" and is split
    once, at construction, on the first "." or, failing that, the first "#".
    Empty parts are unconstrained, so ".ad" matches any tag with class "ad".

    Examples:
        "div.card"  -> tag="div",  class_name="card", id=""
        "span#hero" -> tag="span", class_name="",     id="hero"
        "p"         -> tag="p",    class_name="",     id=""
    """

    expr: StrictStr = Field(default="", description="Compact tag selector: tag, tag.class or tag#id.")
    tag: str = Field(default="", exclude=True)
    class_name: str = Field(default="", exclude=True)
    id: str = Field(default="", exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _parse_expr(cls, data):
        if isinstance(data, str):
            data = {"expr": data}
        if isinstance(data, dict):
            expr = data.get("expr") or ""
            tag, class_name, id_ = parse_exclude(expr) if isinstance(expr, str) else ("", "", "")
            data = {"expr": expr, "tag": tag, "class_name": class_name, "id": id_}
        return data

    def has_expr(self) -> bool:
        return bool(self.expr)

    def matches(self, node) -> bool:
        if not isinstance(node, Tag) or not self.has_expr():
            return False
        return (
            (not self.tag or self.tag == node.name)
            and (not self.class_name or self.class_name in (node.get("class") or ()))
            and (not self.id or self.id == node.get("id"))
        )


def parse_exclude(expr: str) -> tuple[str, str, str]:
    """Split an exclude expression into (tag, class name, id)."""
    tag, sep, class_name = expr.partition(".")
    if sep:
        return tag, class_name, ""
    tag, sep, id_ = expr.partition("#")
    if sep:
        return tag, "", id_
    return expr, "", ""


def apply_excludes(excludes: Optional[Iterable[FieldExclude]], node) -> bool:
    """
    True if any exclude rule matches the node.

    Within a rule the tag, class and id constraints are ANDed; across rules
    they are ORed. Strings, comments and other non-element nodes never match.
    """
    if not excludes or not isinstance(node, Tag):
        return False
    return any(exclude.matches(node) for exclude in excludes)


def strip_excludes(node: Tag, excludes: Optional[Iterable[FieldExclude]]) -> Tag:
    """
    Return a copy of node with every excluded descendant removed.

    The node itself is never removed and the original tree is left intact.
    """
    excludes = tuple(excludes or ())
    if not excludes:
        return node

    node = copy.copy(node)
    for tag in node.find_all(True):
        if tag.decomposed:
            continue
        if apply_excludes(excludes, tag):
            tag.decompose()
    return node

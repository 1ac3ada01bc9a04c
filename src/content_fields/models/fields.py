from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from pydantic import Field as PydanticField
from pydantic import model_validator

from .base import BaseModel
from .field import Field
from .selector import FieldSelector

__all__ = ("FIELD_NAMES", "Fields")

FIELD_NAMES: Tuple[str, ...] = (
    "validator",
    "title",
    "author",
    "author-link",
    "published-date",
    "start-date",
    "start-time",
    "end-date",
    "end-time",
    "timezone",
    "body",
    "url",
    "image",
    "background-image",
)


class Fields(BaseModel):
    """
    The field rules for one kind of page, e.g. the article pages of a site.

    The root selector narrows the document to the content area; every slot
    is then evaluated below it. A slot is present only if its field has at
    least one selector.

    Example:
        root: "article.post"
        validator:
          selector: "h1"
        title: "h1"
        published-date:
          selector: {expr: "time", attribute: datetime}
          date-pattern: "%Y-%m-%dT%H:%M:%S%z"
        body:
          selector: {expr: "div.entry-content", output: html}
    """

    root: Optional[FieldSelector] = PydanticField(default=None, description="Content area of the page.")
    validator: Optional[Field] = None
    title: Optional[Field] = None
    author: Optional[Field] = None
    author_link: Optional[Field] = None
    published_date: Optional[Field] = None
    start_date: Optional[Field] = None
    start_time: Optional[Field] = None
    end_date: Optional[Field] = None
    end_time: Optional[Field] = None
    timezone: Optional[Field] = None
    body: Optional[Field] = None
    url: Optional[Field] = None
    image: Optional[Field] = None
    background_image: Optional[Field] = None

    @model_validator(mode="before")
    @classmethod
    def _name_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        data = dict(data)
        for name in FIELD_NAMES:
            attr = name.replace("-", "_")
            key = name if name in data else attr
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, Field):
                value = value.model_dump(by_alias=False)
            elif isinstance(value, (str, list, tuple)):
                value = {"selectors": tuple(cls.to_list(value))}
            elif isinstance(value, Mapping):
                value = dict(value)
            else:
                continue
            value["name"] = name
            data[key] = value
        return data

    def get_field(self, name: str) -> Optional[Field]:
        """The field of a slot, by its kebab-case or snake_case name."""
        return getattr(self, name.replace("-", "_"), None) if name in _SLOTS else None

    def has_field(self, name: str) -> bool:
        field = self.get_field(name)
        return field is not None and field.has_selectors()

    def has_root(self) -> bool:
        return self.root is not None

    def has_validator(self) -> bool:
        return self.has_field("validator")

    def has_title(self) -> bool:
        return self.has_field("title")

    def has_author(self) -> bool:
        return self.has_field("author")

    def has_author_link(self) -> bool:
        return self.has_field("author-link")

    def has_published_date(self) -> bool:
        return self.has_field("published-date")

    def has_start_date(self) -> bool:
        return self.has_field("start-date")

    def has_start_time(self) -> bool:
        return self.has_field("start-time")

    def has_end_date(self) -> bool:
        return self.has_field("end-date")

    def has_end_time(self) -> bool:
        return self.has_field("end-time")

    def has_timezone(self) -> bool:
        return self.has_field("timezone")

    def has_body(self) -> bool:
        return self.has_field("body")

    def has_url(self) -> bool:
        return self.has_field("url")

    def has_image(self) -> bool:
        return self.has_field("image")

    def has_background_image(self) -> bool:
        return self.has_field("background-image")

    def present(self) -> Iterator[Tuple[str, Field]]:
        """The present slots as (name, field) pairs, in declaration order."""
        for name in FIELD_NAMES:
            if self.has_field(name):
                yield name, self.get_field(name)

    def derive(self, **changes: Any) -> "Fields":
        """
        Return a copy with some slots replaced, e.g. a site-level override of
        organisation-level defaults. Slots may be given by their kebab-case
        config key or snake_case name; None removes a slot.
        """
        data: Dict[str, Any] = self.model_dump(by_alias=False)
        for key, value in changes.items():
            data[key.replace("-", "_")] = value
        return type(self).from_dict(data)


_SLOTS = frozenset(FIELD_NAMES) | frozenset(name.replace("-", "_") for name in FIELD_NAMES)

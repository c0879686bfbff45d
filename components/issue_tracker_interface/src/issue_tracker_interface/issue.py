"""Issue contract - Core issue representation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Union

__all__ = [
    "RESERVED_FIELDS",
    "Comment",
    "DateValue",
    "Field",
    "FieldValue",
    "Issue",
    "Link",
    "ListValue",
    "ScalarValue",
    "Tag",
    "TextValue",
    "field_value",
    "is_reserved",
]

#names that map to built-in issue attributes and are never sent as commands
RESERVED_FIELDS: frozenset[str] = frozenset(
    {"id", "entityid", "jiraid", "summary", "description", "markdown"}
)

_COMMAND_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def is_reserved(name: str) -> bool:
    """Return True if name is a built-in issue attribute (case-insensitive)."""
    return name.lower() in RESERVED_FIELDS


# ---------------------------------------------------------------------------
# Field values - one formatting rule per kind
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextValue:
    text: str

    def format(self) -> str:
        return self.text


@dataclass(frozen=True)
class DateValue:
    """A point in time, rendered with seconds precision and no offset."""

    moment: datetime | date

    def format(self) -> str:
        moment = self.moment
        if not isinstance(moment, datetime):
            #a plain date is taken at midnight
            moment = datetime(moment.year, moment.month, moment.day)
        return moment.strftime(_COMMAND_DATE_FORMAT)


@dataclass(frozen=True)
class ListValue:
    items: tuple[str, ...]

    def format(self) -> str:
        return " ".join(self.items)


@dataclass(frozen=True)
class ScalarValue:
    """Anything else, rendered with its default string form."""

    value: Any

    def format(self) -> str:
        return str(self.value)


FieldValue = Union[TextValue, DateValue, ListValue, ScalarValue]

_FIELD_VALUE_TYPES = (TextValue, DateValue, ListValue, ScalarValue)


def field_value(raw: Any) -> FieldValue:
    """Wrap a plain Python value into the matching field value kind.

    Values that already are a field value kind pass through unchanged.
    Only the string members of a collection are kept.
    """
    if isinstance(raw, _FIELD_VALUE_TYPES):
        return raw
    if isinstance(raw, str):
        return TextValue(raw)
    #datetime is a subclass of date, both are dates here
    if isinstance(raw, date):
        return DateValue(raw)
    if isinstance(raw, Iterable):
        return ListValue(tuple(item for item in raw if isinstance(item, str)))
    return ScalarValue(raw)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Field:
    """A named field value."""

    name: str
    value: FieldValue

    def command(self) -> str:
        """Return the command that sets this field, e.g. 'Priority Critical'."""
        return f"{self.name} {self.value.format()}"


@dataclass(frozen=True)
class Comment:
    """Comment text, optionally attributed to another user via runAs."""

    text: str
    author: str | None = None


@dataclass(frozen=True)
class Tag:
    value: str


@dataclass(frozen=True)
class Link:
    """A relationship between two issues as reported by the server.

    The shape is owned by the server; the well-known attributes are lifted
    out and the full JSON object is kept in ``raw``.
    """

    type_name: str | None
    source: str | None
    target: str | None
    type_inward: str | None = None
    type_outward: str | None = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)


@dataclass
#dataclass rather than an ABC: callers build issues themselves before creating them
class Issue:
    """An issue as created by the caller or returned by the server.

    ``id`` is assigned by the server. ``fields`` maps field names to field
    values; names in RESERVED_FIELDS are kept but never become commands.
    """

    id: str | None = None
    summary: str | None = None
    description: str | None = None
    is_markdown: bool = False
    fields: dict[str, FieldValue] = field(default_factory=dict)
    comments: list[Comment] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)

    def set_field(self, name: str, value: Any) -> None:
        """Set a field, wrapping plain Python values with field_value()."""
        self.fields[name] = field_value(value)

    def get_field(self, name: str) -> FieldValue | None:
        """Return a field value by name, compared case-insensitively."""
        if name in self.fields:
            return self.fields[name]
        lowered = name.lower()
        for key, value in self.fields.items():
            if key.lower() == lowered:
                return value
        return None

    def custom_fields(self) -> list[Field]:
        """Return the non-reserved fields in insertion order."""
        return [Field(name, value) for name, value in self.fields.items() if not is_reserved(name)]

    def __repr__(self) -> str:
        return f"<Issue id={self.id!r} summary={self.summary!r}>"

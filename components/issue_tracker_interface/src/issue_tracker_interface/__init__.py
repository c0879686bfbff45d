"""Issue tracker client contract and data model."""

from issue_tracker_interface.client import (
    CommandRejectedError,
    InvalidArgumentError,
    IssueTrackerClient,
    IssueTrackerError,
    RequestFailedError,
)
from issue_tracker_interface.issue import (
    RESERVED_FIELDS,
    Comment,
    DateValue,
    Field,
    FieldValue,
    Issue,
    Link,
    ListValue,
    ScalarValue,
    Tag,
    TextValue,
    field_value,
    is_reserved,
)

__all__ = [
    "RESERVED_FIELDS",
    "CommandRejectedError",
    "Comment",
    "DateValue",
    "Field",
    "FieldValue",
    "InvalidArgumentError",
    "Issue",
    "IssueTrackerClient",
    "IssueTrackerError",
    "Link",
    "ListValue",
    "RequestFailedError",
    "ScalarValue",
    "Tag",
    "TextValue",
    "field_value",
    "is_reserved",
]

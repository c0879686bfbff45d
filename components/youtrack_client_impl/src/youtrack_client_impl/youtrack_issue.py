"""YouTrack JSON to Issue/Link mapping."""

from __future__ import annotations

from typing import Any

from issue_tracker_interface.issue import Comment, Issue, Link, Tag, field_value

# ---------------------------------------------------------------------------
# Wire shape of the legacy REST API:
#   {"id": "HBR-63", "entityId": "...", "jiraId": null,
#    "field": [{"name": "summary", "value": "..."}, {"name": "Priority", "value": ["Normal"]}],
#    "comment": [{"author": "root", "text": "..."}],
#    "tag": [{"value": "urgent"}]}
# ---------------------------------------------------------------------------

def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _as_text(value: Any) -> str | None:
    #single valued fields sometimes arrive wrapped in a one element list
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def build_issue(raw_data: dict) -> Issue:
    """Return an Issue from a YouTrack ``rest/issue/{id}`` response.

    Every entry of the ``field`` list ends up in ``Issue.fields``; summary,
    description and markdown are also lifted onto the matching attributes.
    """
    issue = Issue(id=raw_data.get("id"))

    for key in ("entityId", "jiraId"):
        if raw_data.get(key) is not None:
            issue.set_field(key, str(raw_data[key]))

    for entry in raw_data.get("field") or []:
        if not isinstance(entry, dict) or not entry.get("name"):
            continue
        name = entry["name"]
        value = entry.get("value")
        lowered = name.lower()
        if lowered == "summary":
            issue.summary = _as_text(value)
        elif lowered == "description":
            issue.description = _as_text(value)
        elif lowered == "markdown":
            issue.is_markdown = _as_bool(_as_text(value))
        if value is not None:
            issue.fields[name] = field_value(value)

    for entry in raw_data.get("comment") or []:
        if isinstance(entry, dict):
            issue.comments.append(Comment(text=entry.get("text") or "", author=entry.get("author")))

    for entry in raw_data.get("tag") or []:
        if isinstance(entry, dict) and entry.get("value") is not None:
            issue.tags.append(Tag(entry["value"]))

    return issue


def build_link(raw_data: dict) -> Link:
    """Return a Link from one element of a ``rest/issue/{id}/link`` response."""
    return Link(
        type_name=raw_data.get("typeName"),
        source=raw_data.get("source"),
        target=raw_data.get("target"),
        type_inward=raw_data.get("typeInward"),
        type_outward=raw_data.get("typeOutward"),
        raw=dict(raw_data),
    )

"""Shared utility functions for the Core service."""

from datetime import datetime


def parse_db_datetime(dt_str: str | None) -> datetime | None:
    """Parse datetime string from database, handling 'Z' and '+00:00' formats."""
    if not dt_str:
        return None
    if "+" in dt_str and dt_str.endswith("Z"):
        dt_str = dt_str[:-1]
    elif dt_str.endswith("Z"):
        dt_str = dt_str.replace("Z", "+00:00")
    return datetime.fromisoformat(dt_str)


def resolve_tags(tags: list[str] | None, tags_input: str | None) -> list[str]:
    """Resolve a memory's tags from the upload form.

    Repeated `tags` fields win; the space-separated `tags_input` is only read
    when no `tags` field was sent, since multi-word tags do not survive the
    split. Blank entries are dropped, duplicates collapse, and the order of
    first appearance is kept.
    """
    candidates = [t for t in (tags or []) if t.strip()]
    if not candidates and tags_input:
        candidates = tags_input.split()

    merged: list[str] = []
    for tag in candidates:
        tag = tag.strip()
        if tag not in merged:
            merged.append(tag)
    return merged

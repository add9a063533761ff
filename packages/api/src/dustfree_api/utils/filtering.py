"""Supabase filter builders shared by the services."""

from __future__ import annotations

from datetime import datetime
from typing import Any


def apply_time_range(
    query: Any,
    column: str,
    start: datetime | None,
    end: datetime | None,
) -> Any:
    """Apply an inclusive timestamp range to a Supabase query builder."""
    if start is not None:
        query = query.gte(column, start.isoformat())
    if end is not None:
        query = query.lte(column, end.isoformat())
    return query


def apply_optional_eq(query: Any, column: str, value: Any) -> Any:
    if value is not None:
        query = query.eq(column, str(value))
    return query


def first_embedded(value: Any) -> Any:
    """PostgREST may return a to-one embed as a one-element list."""
    if isinstance(value, list):
        return value[0] if value else None
    return value

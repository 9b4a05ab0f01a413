"""Field-level decoding rules for loosely-typed model output.

Each rule takes an arbitrary JSON value and returns the expected shape, or a
named default when the value is absent or of the wrong type.
"""
from __future__ import annotations

from typing import Any

from app.schemas.jobs import JobQuery


def coerce_str(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    return default


def coerce_non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def coerce_optional_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def coerce_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return []


def coerce_str_list(value: Any) -> list[str]:
    return [item.strip() for item in coerce_list(value) if isinstance(item, str) and item.strip()]


def coerce_job_query(value: Any) -> JobQuery | None:
    if not isinstance(value, dict):
        return None
    title = coerce_non_empty_str(value.get("title"))
    query = coerce_non_empty_str(value.get("query"))
    if not title or not query:
        return None
    return JobQuery(title=title, query=query)


def coerce_job_queries(value: Any) -> list[JobQuery]:
    queries: list[JobQuery] = []
    for item in coerce_list(value):
        if isinstance(item, JobQuery):
            queries.append(item)
            continue
        parsed = coerce_job_query(item)
        if parsed is not None:
            queries.append(parsed)
    return queries


def coerce_job_objects(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """The ``jobs`` array of a synthesis response, keeping only object entries."""
    return [item for item in coerce_list(payload.get("jobs")) if isinstance(item, dict)]

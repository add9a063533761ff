"""Response envelopes shared by every endpoint.

Success: ``{"data": ..., "meta": {"total_count", "currency"}, "links": {...}}``
Error:   ``{"error": {"code", "message", "details"}}``
"""

from __future__ import annotations

from typing import Any


def wrap_response(
    data: Any,
    *,
    total_count: int | None = None,
    currency: str | None = None,
    links: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a success envelope; unset meta keys are omitted."""
    meta = {
        "total_count": total_count,
        "currency": currency,
    }
    return {
        "data": data,
        "meta": {k: v for k, v in meta.items() if v is not None},
        "links": links or {},
    }


def error_response(
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    err: dict[str, Any] = {"code": code, "message": message}
    if details:
        err["details"] = details
    return {"error": err}

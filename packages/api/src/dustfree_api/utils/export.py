"""CSV export of row lists."""

from __future__ import annotations

import io
from typing import Any

import polars as pl
from fastapi.responses import StreamingResponse


def flatten_cleaning(row: dict[str, Any]) -> dict[str, Any]:
    prop = row.get("property") or {}
    cleaner = row.get("cleaner") or {}
    return {
        "id": row.get("id"),
        "completed_at": row.get("completed_at"),
        "property": prop.get("name"),
        "floor": prop.get("floor"),
        "room_number": prop.get("room_number"),
        "cleaner": cleaner.get("name"),
        "duration_hours": _num(row.get("duration_hours")),
        "transport_cost": _num(row.get("transport_cost")),
        "amount": _num(row.get("amount")),
    }


def to_csv(rows: list[dict[str, Any]]) -> str:
    if not rows:
        return ""
    df = pl.DataFrame(rows, infer_schema_length=None)
    buf = io.BytesIO()
    df.write_csv(buf)
    return buf.getvalue().decode()


def csv_response(rows: list[dict[str, Any]], filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([to_csv(rows)]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _num(value: Any) -> float | None:
    return float(value) if value is not None else None

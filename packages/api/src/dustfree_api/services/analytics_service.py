"""Monthly cleaning cost per property over the trailing six months."""

from __future__ import annotations

from datetime import date
from typing import Any

import polars as pl
import structlog

from dustfree_shared.config import settings
from dustfree_shared.constants import ANALYTICS_MONTHS, COLOR_PALETTE
from dustfree_shared.time_utils import day_bounds, event_time, local_day, month_end, trailing_months

from dustfree_api.services import cleaning_service

log = structlog.get_logger(__name__)

_SCHEMA = {
    "month": pl.Utf8,
    "property_id": pl.Utf8,
    "property_name": pl.Utf8,
    "cost": pl.Float64,
}


def monthly_costs(
    cleanings: list[dict[str, Any]],
    *,
    today: date,
    tz: str,
    months: int = ANALYTICS_MONTHS,
) -> dict[str, Any]:
    """
    Sum cleaning cost per (month, property) for the months ending with today's.

    Cost is ``amount + transport_cost`` per cleaning, the figure the host
    dashboard charts.
    Cleanings outside the window are ignored.

    Returns:
        dict with ``months`` (key/label), ``properties`` (id/name/color,
        alphabetical), ``series`` (one entry per month with a value for
        every property) and ``has_data``.
    """
    month_starts = trailing_months(today, months)
    month_keys = [m.strftime("%Y-%m") for m in month_starts]

    records = []
    for c in cleanings:
        when = event_time(c)
        prop = c.get("property") or {}
        if when is None or not prop.get("id"):
            continue
        records.append(
            {
                "month": local_day(when, tz).strftime("%Y-%m"),
                "property_id": str(prop["id"]),
                "property_name": prop.get("name") or "",
                "cost": float(c.get("amount") or 0) + float(c.get("transport_cost") or 0),
            }
        )

    df = pl.DataFrame(records, schema=_SCHEMA).filter(pl.col("month").is_in(month_keys))
    totals = df.group_by(["month", "property_id"]).agg(pl.col("cost").sum())
    names = (
        df.select(["property_id", "property_name"])
        .unique(subset=["property_id"], keep="first")
        .sort("property_name")
    )

    properties = [
        {"id": row["property_id"], "name": row["property_name"], "color": COLOR_PALETTE[i % len(COLOR_PALETTE)]}
        for i, row in enumerate(names.iter_rows(named=True))
    ]
    lookup = {(r["month"], r["property_id"]): r["cost"] for r in totals.iter_rows(named=True)}
    series = [
        {
            "month": key,
            "label": start.strftime("%b %Y"),
            "values": {p["id"]: lookup.get((key, p["id"]), 0.0) for p in properties},
        }
        for key, start in zip(month_keys, month_starts)
    ]
    has_data = any(v > 0 for s in series for v in s["values"].values())
    return {
        "months": [{"key": s["month"], "label": s["label"]} for s in series],
        "properties": properties,
        "series": series,
        "has_data": has_data,
    }


def get_monthly_costs(host_id: str, today: date) -> dict[str, Any]:
    month_starts = trailing_months(today, ANALYTICS_MONTHS)
    lower, upper = day_bounds(month_starts[0], month_end(today), settings.timezone)
    cleanings = cleaning_service.list_host_cleanings(
        host_id, start=lower, end=upper, time_column="completed_at"
    )
    log.debug("analytics_rows", host_id=host_id, rows=len(cleanings))
    return monthly_costs(cleanings, today=today, tz=settings.timezone)

"""
Gantt-style timeline of completed cleanings: one row per property, one
column per local calendar day, plus a leading Total row.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Iterable

from dustfree_shared.config import settings
from dustfree_shared.constants import COLOR_PALETTE
from dustfree_shared.time_utils import day_bounds, each_day, event_time, local_day

from dustfree_api.services import cleaning_service, property_service

TOTAL_ROW_ID = "__total__"


def cleaner_color(cleaner_id: str) -> str:
    """Stable palette colour for a cleaner (31-multiplier string hash, int32 wrap)."""
    h = 0
    for ch in cleaner_id:
        h = (h << 5) - h + ord(ch)
        h = (h + 2**31) % 2**32 - 2**31
    return COLOR_PALETTE[abs(h) % len(COLOR_PALETTE)]


def _split_fee(cleaning: dict[str, Any]) -> tuple[float, float]:
    """(cleaning fee without transport, transport) for one cleaning."""
    amount = float(cleaning.get("amount") or 0)
    transport = float(cleaning.get("transport_cost") or 0)
    return max(0.0, amount - transport), transport


def _totals(cleanings: Iterable[dict[str, Any]]) -> dict[str, float]:
    fee = transport = 0.0
    for c in cleanings:
        f, t = _split_fee(c)
        fee += f
        transport += t
    return {"cleaning": fee, "transport": transport, "other": 0.0, "total": fee + transport}


def _subtitle(prop: dict[str, Any]) -> str:
    parts = [p for p in (prop.get("floor"), prop.get("room_number")) if p]
    return " • ".join(parts) if parts else "-"


def build_timeline(
    properties: list[dict[str, Any]],
    cleanings: list[dict[str, Any]],
    *,
    start: date,
    end: date,
    tz: str,
    cleaner_id: str | None = None,
    buildings: list[str] | None = None,
) -> dict[str, Any]:
    """Bucket completed cleanings into (property, day) cells for [start, end]."""
    lower, upper = day_bounds(start, end, tz)
    selected = set(buildings or [])

    def keep(c: dict[str, Any]) -> bool:
        if c.get("status") != "completed":
            return False
        if cleaner_id is not None and (c.get("cleaner_id") or (c.get("cleaner") or {}).get("id")) != cleaner_id:
            return False
        if selected and (c.get("property") or {}).get("name") not in selected:
            return False
        when = event_time(c)
        return when is not None and lower <= when <= upper

    filtered = [c for c in cleanings if keep(c)]

    if not properties:
        properties = list({c["property"]["id"]: c["property"] for c in cleanings if c.get("property")}.values())
    catalogue = sorted(properties, key=lambda p: (p.get("name") or "").casefold())
    building_names = sorted({p["name"] for p in catalogue}, key=str.casefold)
    shown = [p for p in catalogue if not selected or p["name"] in selected]

    by_property: dict[str, list[dict[str, Any]]] = defaultdict(list)
    day_totals: dict[str, dict[str, float]] = defaultdict(lambda: {"amount": 0.0, "transport": 0.0})
    for c in filtered:
        when = event_time(c)
        key = local_day(when, tz).isoformat()
        by_property[c["property_id"]].append(c)
        day_totals[key]["amount"] += float(c.get("amount") or 0)
        day_totals[key]["transport"] += float(c.get("transport_cost") or 0)

    days = [d.isoformat() for d in each_day(start, end)]
    rows: list[dict[str, Any]] = [
        {
            "id": TOTAL_ROW_ID,
            "name": "Total",
            "subtitle": "All properties",
            "is_total": True,
            "count": len(filtered),
            "totals": _totals(filtered),
            "days": {d: day_totals[d] for d in days if d in day_totals},
        }
    ]
    for prop in shown:
        items = sorted(by_property.get(prop["id"], []), key=lambda c: event_time(c))
        cells: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for c in items:
            cleaner = c.get("cleaner") or {}
            cid = cleaner.get("id") or c.get("cleaner_id") or ""
            cells[local_day(event_time(c), tz).isoformat()].append(
                {
                    "id": c["id"],
                    "at": event_time(c).isoformat(),
                    "cleaner_id": cid,
                    "cleaner_name": cleaner.get("name"),
                    "color": cleaner_color(cid),
                    "amount": c.get("amount"),
                    "transport_cost": c.get("transport_cost"),
                    "duration_hours": c.get("duration_hours"),
                }
            )
        rows.append(
            {
                "id": prop["id"],
                "name": prop["name"],
                "subtitle": _subtitle(prop),
                "is_total": False,
                "count": len(items),
                "totals": _totals(items),
                "days": dict(cells),
            }
        )

    return {
        "from": start.isoformat(),
        "to": end.isoformat(),
        "days": days,
        "buildings": building_names,
        "rows": rows,
    }


def get_timeline(
    host_id: str,
    *,
    start: date,
    end: date,
    cleaner_id: str | None = None,
    buildings: list[str] | None = None,
) -> dict[str, Any]:
    return build_timeline(
        property_service.list_properties(host_id),
        cleaning_service.list_host_cleanings(host_id),
        start=start,
        end=end,
        tz=settings.timezone,
        cleaner_id=cleaner_id,
        buildings=buildings,
    )

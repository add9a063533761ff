"""Properties owned by a host."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog

from dustfree_shared.config import settings
from dustfree_shared.constants import PROPERTIES
from dustfree_shared.db import get_supabase_client
from dustfree_shared.models import Property, property_label

from dustfree_api.errors import NotFoundError

log = structlog.get_logger(__name__)


def list_properties(host_id: str) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    result = (
        supabase.table(PROPERTIES)
        .select("*")
        .eq("host_id", host_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [with_label(row) for row in result.data]


def list_properties_by_name(host_id: str) -> list[dict[str, Any]]:
    """Properties for pickers: alphabetical, with label and effective rate."""
    rows = sorted(list_properties(host_id), key=lambda r: (r.get("name") or "").casefold())
    for row in rows:
        row["rate"] = effective_rate(row.get("cleaner_rate_baht"))
    return rows


def list_property_ids(host_id: str) -> list[str]:
    supabase = get_supabase_client()
    result = supabase.table(PROPERTIES).select("id").eq("host_id", host_id).execute()
    return [row["id"] for row in result.data]


def get_owned_property(host_id: str, property_id: str) -> dict[str, Any]:
    """Fetch a property, hiding it unless ``host_id`` owns it."""
    supabase = get_supabase_client()
    result = (
        supabase.table(PROPERTIES)
        .select("*")
        .eq("id", property_id)
        .eq("host_id", host_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        raise NotFoundError("Property not found")
    return with_label(result.data[0])


def create_property(host_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    prop = Property(host_id=host_id, **normalize_fields({"cleaner_rate_baht": None, **fields}))
    row = prop.to_insert_dict()
    supabase = get_supabase_client()
    supabase.table(PROPERTIES).insert(row).execute()
    log.info("property_created", host_id=host_id, property_id=row["id"])
    return with_label(row)


def update_property(host_id: str, property_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    current = get_owned_property(host_id, property_id)
    changes = normalize_fields(fields)
    supabase = get_supabase_client()
    supabase.table(PROPERTIES).update(changes).eq("id", property_id).execute()
    log.info("property_updated", host_id=host_id, property_id=property_id)
    return with_label({**current, **changes})


def delete_property(host_id: str, property_id: str) -> None:
    get_owned_property(host_id, property_id)
    supabase = get_supabase_client()
    supabase.table(PROPERTIES).delete().eq("id", property_id).execute()
    log.info("property_deleted", host_id=host_id, property_id=property_id)


def normalize_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Apply form defaults: rate falls back to the flat rate, blanks become null."""
    out = dict(fields)
    if "cleaner_rate_baht" in out:
        out["cleaner_rate_baht"] = effective_rate(out["cleaner_rate_baht"])
    for key in ("floor", "room_number", "description"):
        if key in out:
            value = (out[key] or "").strip()
            out[key] = value or None
    return out


def effective_rate(rate: Any) -> float:
    """Payout rate for one cleaning; non-positive or missing means the default."""
    try:
        value = float(Decimal(str(rate))) if rate is not None else 0.0
    except ArithmeticError:
        value = 0.0
    return value if value > 0 else settings.default_cleaning_rate


def with_label(row: dict[str, Any]) -> dict[str, Any]:
    return {**row, "label": property_label(row.get("name", ""), row.get("floor"), row.get("room_number"))}

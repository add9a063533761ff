"""Logged cleanings: host views, cleaner logging, and cost arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

import structlog

from dustfree_shared.constants import (
    CLEANING_MEDIA,
    CLEANINGS,
    MEDIA_CATEGORY_ORDER,
    RECEIPT_CATEGORIES,
)
from dustfree_shared.db import get_supabase_client
from dustfree_shared.models import Cleaning, CleaningMedia
from dustfree_shared.time_utils import duration_hours, parse_timestamp, utc_now

from dustfree_api.errors import NotFoundError, ValidationFailed
from dustfree_api.services import property_service
from dustfree_api.utils.filtering import apply_optional_eq, apply_time_range, first_embedded

log = structlog.get_logger(__name__)

HOST_SELECT = (
    "*, property:properties(id, name, address, floor, room_number, cleaner_rate_baht), "
    "cleaner:cleaners(id, name)"
)
CLEANER_SELECT = (
    "id, status, scheduled_date, completed_at, duration_hours, amount, transport_cost, "
    "property_id, cleaner_id, property:properties(id, name, address, floor, room_number)"
)
MEDIA_SELECT = "id, media_url, media_type, category, captured_at, uploaded_at"


@dataclass
class MediaRef:
    """A file the client already uploaded to storage."""

    media_url: str
    category: str
    captured_at: datetime | None = None
    media_type: str = "image"


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def sum_transport(costs: Iterable[float | None]) -> float:
    """Sum receipt amounts; blanks and negatives count as zero."""
    return float(sum(max(0.0, float(c or 0)) for c in costs))


def compute_amount(base_rate: float, transport: float) -> float:
    """What the host owes for one job: the property's flat rate plus transport."""
    return float(base_rate) + float(transport)


def rebase_amount(amount: float | None, old_transport: float | None, new_transport: float) -> float:
    """Swap the transport component of an amount, keeping the cleaning fee."""
    base = float(amount or 0) - float(old_transport or 0)
    return base + new_transport


def clamp_amount(value: float) -> int:
    return max(0, round(value))


def media_sort_key(row: dict[str, Any]) -> tuple[int, float]:
    rank = MEDIA_CATEGORY_ORDER.get(row.get("category") or "", 99)
    when = parse_timestamp(row.get("captured_at")) or parse_timestamp(row.get("uploaded_at"))
    return rank, when.timestamp() if when else 0.0


def sort_media(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Start photos, then after photos, then receipts, each oldest first."""
    return sorted(rows, key=media_sort_key)


def normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    out = dict(row)
    for key in ("property", "cleaner"):
        if key in out:
            out[key] = first_embedded(out[key])
    return out


# ---------------------------------------------------------------------------
# Host side
# ---------------------------------------------------------------------------


def list_host_cleanings(
    host_id: str,
    *,
    cleaner_id: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    time_column: str = "scheduled_date",
) -> list[dict[str, Any]]:
    """Completed cleanings at the host's properties, newest first."""
    property_ids = property_service.list_property_ids(host_id)
    if not property_ids:
        return []
    supabase = get_supabase_client()
    query = (
        supabase.table(CLEANINGS)
        .select(HOST_SELECT)
        .in_("property_id", property_ids)
        .eq("status", "completed")
    )
    query = apply_optional_eq(query, "cleaner_id", cleaner_id)
    query = apply_time_range(query, time_column, start, end)
    result = query.order(time_column, desc=True).execute()
    return [normalize_row(r) for r in result.data]


def get_host_cleaning(host_id: str, cleaning_id: str) -> dict[str, Any]:
    property_ids = set(property_service.list_property_ids(host_id))
    supabase = get_supabase_client()
    result = (
        supabase.table(CLEANINGS).select(HOST_SELECT).eq("id", cleaning_id).limit(1).execute()
    )
    if not result.data or result.data[0].get("property_id") not in property_ids:
        raise NotFoundError("Cleaning not found")
    row = normalize_row(result.data[0])
    row["media"] = list_media(cleaning_id)
    return row


def set_amount(host_id: str, cleaning_id: str, value: float) -> dict[str, Any]:
    """Host override of the amount owed for one cleaning."""
    cleaning = get_host_cleaning(host_id, cleaning_id)
    amount = clamp_amount(value)
    supabase = get_supabase_client()
    supabase.table(CLEANINGS).update({"amount": amount}).eq("id", cleaning_id).execute()
    log.info("cleaning_amount_set", cleaning_id=cleaning_id, amount=amount)
    return {**cleaning, "amount": amount}


def list_media(cleaning_id: str, categories: Iterable[str] | None = None) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    query = supabase.table(CLEANING_MEDIA).select(MEDIA_SELECT).eq("cleaning_id", cleaning_id)
    if categories is not None:
        query = query.in_("category", list(categories))
    return sort_media(query.execute().data)


# ---------------------------------------------------------------------------
# Cleaner side
# ---------------------------------------------------------------------------


def log_cleaning(
    cleaner: dict[str, Any],
    *,
    property_id: str,
    transport_costs: Iterable[float | None],
    media: list[MediaRef],
    started_at: datetime | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Record a finished job at one of the cleaner's host's properties.

    Duration runs from the start photo (or submission when there is none)
    to submission. Timestamps without an offset are taken as UTC.
    """
    if not any(m.category == "after" for m in media):
        raise ValidationFailed("After photo is required")
    prop = property_service.get_owned_property(cleaner["host_id"], property_id)

    now = parse_timestamp(now) or utc_now()
    transport = sum_transport(transport_costs)
    base_rate = property_service.effective_rate(prop.get("cleaner_rate_baht"))
    cleaning = Cleaning(
        property_id=property_id,
        cleaner_id=cleaner["id"],
        scheduled_date=now,
        completed_at=now,
        status="completed",
        duration_hours=duration_hours(parse_timestamp(started_at) or now, now),
        amount=compute_amount(base_rate, transport),
        transport_cost=transport,
    )
    row = cleaning.to_insert_dict()
    supabase = get_supabase_client()
    supabase.table(CLEANINGS).insert(row).execute()

    media_rows = record_media(row["id"], media, default_captured_at=now)
    log.info(
        "cleaning_logged",
        cleaning_id=row["id"],
        cleaner_id=cleaner["id"],
        property_id=property_id,
        amount=row["amount"],
        media=len(media_rows),
    )
    return {**row, "property": prop, "media": media_rows}


def record_media(
    cleaning_id: str,
    refs: list[MediaRef],
    *,
    default_captured_at: datetime,
) -> list[dict[str, Any]]:
    if not refs:
        return []
    rows = [
        CleaningMedia(
            cleaning_id=cleaning_id,
            media_url=ref.media_url,
            media_type=ref.media_type,
            category=ref.category,
            captured_at=parse_timestamp(ref.captured_at) or default_captured_at,
        ).to_insert_dict()
        for ref in refs
    ]
    supabase = get_supabase_client()
    supabase.table(CLEANING_MEDIA).insert(rows).execute()
    return sort_media(rows)


def list_cleaner_cleanings(cleaner_id: str) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    result = (
        supabase.table(CLEANINGS)
        .select(CLEANER_SELECT)
        .eq("cleaner_id", cleaner_id)
        .order("scheduled_date", desc=True)
        .execute()
    )
    return [normalize_row(r) for r in result.data]


def get_cleaner_cleaning(cleaner_id: str, cleaning_id: str) -> dict[str, Any]:
    supabase = get_supabase_client()
    result = (
        supabase.table(CLEANINGS)
        .select(CLEANER_SELECT)
        .eq("id", cleaning_id)
        .eq("cleaner_id", cleaner_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        raise NotFoundError("Cleaning not found")
    row = normalize_row(result.data[0])
    row["receipts"] = list_media(cleaning_id, RECEIPT_CATEGORIES)
    return row


def update_transport(
    cleaner_id: str,
    cleaning_id: str,
    *,
    transport_costs: Iterable[float | None],
    receipts: list[MediaRef],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Replace the transport claimed on a cleaning and attach new receipts."""
    cleaning = get_cleaner_cleaning(cleaner_id, cleaning_id)
    for ref in receipts:
        if ref.category not in RECEIPT_CATEGORIES:
            raise ValidationFailed(f"'{ref.category}' is not a receipt category")

    new_transport = sum_transport(transport_costs)
    new_amount = rebase_amount(cleaning.get("amount"), cleaning.get("transport_cost"), new_transport)
    supabase = get_supabase_client()
    supabase.table(CLEANINGS).update(
        {"transport_cost": new_transport, "amount": new_amount}
    ).eq("id", cleaning_id).execute()

    added = record_media(cleaning_id, receipts, default_captured_at=now or utc_now())
    log.info(
        "transport_updated",
        cleaning_id=cleaning_id,
        transport=new_transport,
        amount=new_amount,
        receipts_added=len(added),
    )
    return {
        **cleaning,
        "transport_cost": new_transport,
        "amount": new_amount,
        "receipts": sort_media(cleaning["receipts"] + added),
    }

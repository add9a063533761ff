"""
Payouts: what each cleaner is owed, recording payments, and payment history.

A cleaning is *pending* until a cleaner_payouts row references it. Paying a
cleaner settles all of their pending cleanings at once; the rows written
together share one ``paid_at`` and are shown as a single batch.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Any

import structlog

from dustfree_shared.config import settings
from dustfree_shared.constants import CLEANER_PAYOUTS
from dustfree_shared.db import get_supabase_client
from dustfree_shared.models import CleanerPayout
from dustfree_shared.time_utils import event_time, parse_timestamp, utc_now

from dustfree_api.errors import ConflictError
from dustfree_api.services import cleaner_service, cleaning_service

log = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Pure aggregation
# ---------------------------------------------------------------------------


def owed_amount(cleaning: dict[str, Any], default_rate: float | None = None) -> float:
    """Amount owed for a cleaning; unset amounts fall back to the flat rate."""
    amount = cleaning.get("amount")
    if amount is None:
        return float(default_rate if default_rate is not None else settings.default_cleaning_rate)
    return float(amount)


def cleaner_id_of(cleaning: dict[str, Any]) -> str | None:
    embedded = cleaning.get("cleaner") or {}
    return cleaning.get("cleaner_id") or embedded.get("id")


def _newest_first(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    def key(row: dict[str, Any]) -> float:
        when = event_time(row)
        return when.timestamp() if when else float("-inf")

    return sorted(rows, key=key, reverse=True)


def summarize_pending(
    cleaners: list[dict[str, Any]],
    cleanings: list[dict[str, Any]],
    payouts: list[dict[str, Any]],
    *,
    default_rate: float | None = None,
) -> list[dict[str, Any]]:
    """Per-cleaner unpaid cleanings and their sum, in roster order.

    Cleaners with nothing pending are included with zero totals.
    """
    paid: dict[str, set[str]] = defaultdict(set)
    for p in payouts:
        paid[p["cleaner_id"]].add(p["cleaning_id"])

    by_cleaner: dict[str, list[dict[str, Any]]] = defaultdict(list)
    for c in cleanings:
        by_cleaner[cleaner_id_of(c)].append(c)

    summaries = []
    for cleaner in cleaners:
        pending = _newest_first(
            [c for c in by_cleaner.get(cleaner["id"], []) if c["id"] not in paid[cleaner["id"]]]
        )
        summaries.append(
            {
                "cleaner": cleaner,
                "pending_amount": sum(owed_amount(c, default_rate) for c in pending),
                "pending_count": len(pending),
                "pending_cleanings": pending,
            }
        )
    return summaries


def group_batches(
    payouts: list[dict[str, Any]],
    cleanings_by_id: dict[str, dict[str, Any]],
    cleaners_by_id: dict[str, dict[str, Any]],
) -> list[dict[str, Any]]:
    """Group payout rows by (cleaner, paid_at) into batches, newest first."""
    groups: dict[tuple[str, str], dict[str, Any]] = {}
    for p in payouts:
        key = (p["cleaner_id"], p["paid_at"])
        group = groups.get(key)
        if group is None:
            cleaner = cleaners_by_id.get(p["cleaner_id"]) or {}
            group = groups[key] = {
                "cleaner_id": p["cleaner_id"],
                "cleaner_name": cleaner.get("name"),
                "paid_at": p["paid_at"],
                "total": 0.0,
                "proof_of_payment_url": p.get("proof_of_payment_url"),
                "items": [],
            }
        group["total"] += float(p["amount"])
        group["items"].append({"payout": p, "cleaning": cleanings_by_id.get(p["cleaning_id"])})

    def key(g: dict[str, Any]) -> float:
        when = parse_timestamp(g["paid_at"])
        return when.timestamp() if when else float("-inf")

    return sorted(groups.values(), key=key, reverse=True)


def salary_summary(
    cleanings: list[dict[str, Any]],
    payouts: list[dict[str, Any]],
    *,
    default_rate: float | None = None,
) -> dict[str, Any]:
    """A cleaner's earnings: completed totals split into paid and pending."""
    completed = [c for c in cleanings if c.get("status") == "completed"]
    paid_ids = {p["cleaning_id"] for p in payouts}
    pending = [c for c in completed if c["id"] not in paid_ids]
    return {
        "total": sum(float(c.get("amount") or 0) for c in completed),
        "transport": sum(float(c.get("transport_cost") or 0) for c in completed),
        "count": len(completed),
        "paid": sum(float(p["amount"]) for p in payouts),
        "paid_count": len(paid_ids),
        "pending": sum(owed_amount(c, default_rate) for c in pending),
        "pending_count": len(pending),
        "cleanings": [{**c, "paid": c["id"] in paid_ids} for c in cleanings],
    }


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_host_payouts(host_id: str, cleaner_id: str | None = None) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    query = supabase.table(CLEANER_PAYOUTS).select("*").eq("host_id", host_id)
    if cleaner_id is not None:
        query = query.eq("cleaner_id", cleaner_id)
    return query.order("paid_at", desc=True).execute().data


def list_cleaner_payouts(cleaner_id: str) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    result = (
        supabase.table(CLEANER_PAYOUTS)
        .select("*")
        .eq("cleaner_id", cleaner_id)
        .order("paid_at", desc=True)
        .execute()
    )
    return result.data


def get_pending(host_id: str, cleaner_id: str | None = None) -> dict[str, Any]:
    """What the host owes, per cleaner. Only cleaners with unpaid work appear."""
    summaries = [
        s
        for s in summarize_pending(
            cleaner_service.list_cleaners(host_id),
            cleaning_service.list_host_cleanings(host_id, time_column="completed_at"),
            list_host_payouts(host_id),
        )
        if s["pending_count"] > 0
    ]
    total_owed = sum(s["pending_amount"] for s in summaries)
    if cleaner_id is not None:
        summaries = [s for s in summaries if s["cleaner"]["id"] == cleaner_id]
    return {
        "total_owed": total_owed,
        "cleaner_count": len(summaries),
        "cleaning_count": sum(s["pending_count"] for s in summaries),
        "cleaners": summaries,
    }


def record_payment(
    host_id: str,
    cleaner_id: str,
    *,
    proof_of_payment_url: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Settle every pending cleaning of one cleaner as a single batch."""
    cleaner = cleaner_service.get_owned_cleaner(host_id, cleaner_id)
    (summary,) = summarize_pending(
        [cleaner],
        cleaning_service.list_host_cleanings(host_id, cleaner_id=cleaner_id),
        list_host_payouts(host_id, cleaner_id=cleaner_id),
    )
    if summary["pending_count"] == 0:
        raise ConflictError("No pending cleanings for this cleaner")

    paid_at = now or utc_now()
    rows = [
        CleanerPayout(
            host_id=host_id,
            cleaner_id=cleaner_id,
            cleaning_id=c["id"],
            amount=owed_amount(c),
            paid_at=paid_at,
            proof_of_payment_url=proof_of_payment_url,
        ).to_insert_dict()
        for c in summary["pending_cleanings"]
    ]
    supabase = get_supabase_client()
    supabase.table(CLEANER_PAYOUTS).insert(rows).execute()
    log.info(
        "payout_recorded",
        host_id=host_id,
        cleaner_id=cleaner_id,
        cleanings=len(rows),
        total=summary["pending_amount"],
    )
    (batch,) = group_batches(
        rows,
        {c["id"]: c for c in summary["pending_cleanings"]},
        {cleaner_id: cleaner},
    )
    return batch


def get_history(host_id: str, cleaner_id: str | None = None) -> list[dict[str, Any]]:
    payouts = list_host_payouts(host_id, cleaner_id=cleaner_id)
    cleanings = cleaning_service.list_host_cleanings(host_id, cleaner_id=cleaner_id)
    cleaners = cleaner_service.list_cleaners(host_id)
    return group_batches(
        payouts,
        {c["id"]: c for c in cleanings},
        {c["id"]: c for c in cleaners},
    )


def get_salary(cleaner: dict[str, Any]) -> dict[str, Any]:
    return salary_summary(
        cleaning_service.list_cleaner_cleanings(cleaner["id"]),
        list_cleaner_payouts(cleaner["id"]),
    )

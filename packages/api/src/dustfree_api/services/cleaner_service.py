"""The host's cleaner roster and the cleaner's own roster row."""

from __future__ import annotations

import re
from typing import Any

import structlog

from dustfree_shared.constants import CLEANERS, EMAIL_PATTERN
from dustfree_shared.db import get_supabase_client
from dustfree_shared.models import Cleaner

from dustfree_api.errors import NotFoundError, ValidationFailed
from dustfree_api.services import profile_service

log = structlog.get_logger(__name__)

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def list_cleaners(host_id: str) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    result = (
        supabase.table(CLEANERS)
        .select("*")
        .eq("host_id", host_id)
        .order("name")
        .execute()
    )
    return sorted(result.data, key=lambda r: str(r.get("name") or "").casefold())


def get_owned_cleaner(host_id: str, cleaner_id: str) -> dict[str, Any]:
    supabase = get_supabase_client()
    result = (
        supabase.table(CLEANERS)
        .select("*")
        .eq("id", cleaner_id)
        .eq("host_id", host_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        raise NotFoundError("Cleaner not found")
    return result.data[0]


def get_cleaner_for_profile(profile_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client()
    result = (
        supabase.table(CLEANERS)
        .select("*")
        .eq("cleaner_profile_id", profile_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def create_cleaner(
    host_id: str,
    *,
    name: str,
    email: str | None = None,
    phone: str | None = None,
    hourly_rate: float = 0,
) -> dict[str, Any]:
    """Add a roster entry, linking an existing cleaner login with the same email."""
    email = normalize_email(email)
    profile_id = None
    if email:
        profile = profile_service.find_profile_by_email(email)
        if profile and profile.get("role") == "cleaner":
            profile_id = profile["id"]

    cleaner = Cleaner(
        host_id=host_id,
        cleaner_profile_id=profile_id,
        name=name.strip(),
        email=email,
        phone=(phone or "").strip() or None,
        hourly_rate=hourly_rate,
    )
    row = cleaner.to_insert_dict()
    supabase = get_supabase_client()
    supabase.table(CLEANERS).insert(row).execute()
    log.info("cleaner_created", host_id=host_id, cleaner_id=row["id"], linked=profile_id is not None)
    return row


def update_cleaner(host_id: str, cleaner_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    current = get_owned_cleaner(host_id, cleaner_id)
    changes = dict(fields)
    if "email" in changes:
        changes["email"] = normalize_email(changes["email"])
    if "phone" in changes:
        changes["phone"] = (changes["phone"] or "").strip() or None
    if "name" in changes:
        changes["name"] = changes["name"].strip()
    supabase = get_supabase_client()
    supabase.table(CLEANERS).update(changes).eq("id", cleaner_id).execute()
    log.info("cleaner_updated", host_id=host_id, cleaner_id=cleaner_id)
    return {**current, **changes}


def delete_cleaner(host_id: str, cleaner_id: str) -> None:
    get_owned_cleaner(host_id, cleaner_id)
    supabase = get_supabase_client()
    supabase.table(CLEANERS).delete().eq("id", cleaner_id).execute()
    log.info("cleaner_deleted", host_id=host_id, cleaner_id=cleaner_id)


def set_payment_details(cleaner_id: str, image_url: str) -> None:
    """Point the cleaner's payment QR / bank details at an uploaded image."""
    supabase = get_supabase_client()
    supabase.table(CLEANERS).update({"payment_details_image": image_url}).eq(
        "id", cleaner_id
    ).execute()
    log.info("payment_details_updated", cleaner_id=cleaner_id)


def normalize_email(raw: str | None) -> str | None:
    email = (raw or "").strip().lower()
    if not email:
        return None
    if not _EMAIL_RE.match(email):
        raise ValidationFailed("Please enter a valid email address")
    return email

"""Profiles: role lookup and first-login profile creation."""

from __future__ import annotations

from typing import Any

import structlog

from dustfree_shared.constants import DEFAULT_ROLE, PROFILES, ROLES
from dustfree_shared.db import get_supabase_client
from dustfree_shared.models import Profile

log = structlog.get_logger(__name__)


def get_profile(user_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client()
    result = supabase.table(PROFILES).select("*").eq("id", user_id).limit(1).execute()
    return result.data[0] if result.data else None


def find_profile_by_email(email: str) -> dict[str, Any] | None:
    supabase = get_supabase_client()
    result = (
        supabase.table(PROFILES)
        .select("id, email, role")
        .eq("email", email)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def ensure_profile(
    *,
    user_id: str,
    email: str | None,
    user_metadata: dict[str, Any],
) -> dict[str, Any]:
    """Return the caller's profile, creating it on first sight.

    The full name comes from the auth metadata, else the local part of the
    email. The role comes from the metadata, else ``host``.
    """
    existing = get_profile(user_id)
    if existing is not None:
        return existing

    full_name = user_metadata.get("full_name") or (
        email.split("@")[0] if email else "User"
    )
    role = user_metadata.get("role")
    if role not in ROLES:
        role = DEFAULT_ROLE

    profile = Profile(id=user_id, email=email or "", full_name=full_name, role=role)
    row = profile.to_insert_dict()
    supabase = get_supabase_client()
    supabase.table(PROFILES).insert(row).execute()
    log.info("profile_created", user_id=user_id, role=role)
    return row

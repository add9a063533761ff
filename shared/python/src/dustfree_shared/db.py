"""
db.py — the process-wide Supabase client.

The API verifies caller JWTs itself and scopes every query by host or
cleaner, so a single service-role client serves all requests.

Usage:
    from dustfree_shared.db import get_supabase_client

    rows = get_supabase_client().table("properties").select("*").execute().data
"""

from __future__ import annotations

import threading

import structlog
from supabase import Client, create_client

from dustfree_shared.config import settings

logger = structlog.get_logger(__name__)

_lock = threading.Lock()
_client: Client | None = None


def get_supabase_client() -> Client:
    """Return the service-role client, creating it on first use."""
    global _client

    if _client is not None:
        return _client
    with _lock:
        if _client is None:
            if not settings.supabase_service_key:
                raise RuntimeError("SUPABASE_SERVICE_KEY is not set. Add it to .env.")
            _client = create_client(settings.supabase_url, settings.supabase_service_key)
            logger.info("supabase_client_created", url=settings.supabase_url)
    return _client

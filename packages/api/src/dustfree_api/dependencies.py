"""Shared FastAPI dependencies."""

from __future__ import annotations

from dustfree_api.middleware.auth import (
    AuthUser,
    get_current_cleaner,
    get_current_user,
    require_host,
    require_role,
    require_user,
)

__all__ = [
    "AuthUser",
    "get_current_cleaner",
    "get_current_user",
    "require_host",
    "require_role",
    "require_user",
]

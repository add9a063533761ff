"""Supabase JWT authentication and the role gate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog
from fastapi import Depends, HTTPException, Request

from dustfree_shared.config import settings
from dustfree_shared.constants import HOME_PATHS, Role

from dustfree_api.services import cleaner_service, profile_service

logger = structlog.get_logger(__name__)


@dataclass
class AuthUser:
    user_id: str
    role: Role
    email: str | None = None
    full_name: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def home_path(self) -> str:
        return HOME_PATHS[self.role]


def _validate_jwt(token: str) -> dict[str, Any] | None:
    """Validate a Supabase JWT and return its claims."""
    from jose import JWTError, jwt as jose_jwt

    try:
        return jose_jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience="authenticated",
        )
    except JWTError:
        return None


async def get_current_user(request: Request) -> AuthUser | None:
    """Extract the caller from a bearer JWT and look up their role.

    Returns None if no credentials are provided.
    Raises 401 if the token is invalid.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None

    claims = _validate_jwt(auth_header[7:])
    if claims is None or not claims.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    profile = profile_service.ensure_profile(
        user_id=claims["sub"],
        email=claims.get("email"),
        user_metadata=claims.get("user_metadata") or {},
    )
    user = AuthUser(
        user_id=claims["sub"],
        role=profile.get("role", "host"),
        email=profile.get("email") or claims.get("email"),
        full_name=profile.get("full_name"),
        metadata=claims.get("user_metadata") or {},
    )
    request.state.user = user
    structlog.contextvars.bind_contextvars(user_id=user.user_id, role=user.role)
    return user


async def require_user(user: AuthUser | None = Depends(get_current_user)) -> AuthUser:
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def require_role(role: Role):
    """Dependency factory that admits only callers with the given role."""

    async def _dependency(user: AuthUser = Depends(require_user)) -> AuthUser:
        if user.role != role:
            logger.info("role_rejected", user_id=user.user_id, role=user.role, required=role)
            raise HTTPException(
                status_code=403,
                detail=f"This area is for {role}s. Your account belongs in {user.home_path}.",
            )
        return user

    return _dependency


require_host = require_role("host")


async def get_current_cleaner(
    user: AuthUser = Depends(require_role("cleaner")),
) -> dict[str, Any]:
    """The roster row linked to the calling cleaner's login."""
    row = cleaner_service.get_cleaner_for_profile(user.user_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Cleaner account not linked")
    return row

"""Session endpoint: who is calling and where they belong."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dustfree_api.dependencies import AuthUser, require_user
from dustfree_api.responses import wrap_response

router = APIRouter(prefix="/session", tags=["session"])


@router.get("")
async def get_session(user: AuthUser = Depends(require_user)):
    """Role lookup for the auth gate; ``home`` is the area to redirect to."""
    return wrap_response(
        {
            "user_id": user.user_id,
            "email": user.email,
            "full_name": user.full_name,
            "role": user.role,
            "home": user.home_path,
        }
    )

"""
models/profile.py — Pydantic model for the profiles table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from dustfree_shared.constants import Role


class Profile(BaseModel):
    """Matches the profiles table row. ``id`` is the Supabase auth uid."""

    id: UUID
    email: str
    full_name: str
    role: Role = "host"
    phone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "phone": self.phone,
        }

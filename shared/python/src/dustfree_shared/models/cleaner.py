"""
models/cleaner.py — Pydantic model for the cleaners roster table.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class Cleaner(BaseModel):
    """Matches the cleaners table row.

    A roster entry belongs to one host. ``cleaner_profile_id`` links it to
    the cleaner's own login once one exists.
    """

    id: UUID = Field(default_factory=uuid4)
    host_id: UUID
    cleaner_profile_id: UUID | None = None
    name: str
    email: str | None = None
    phone: str | None = None
    hourly_rate: Decimal = Decimal("0")
    payment_details_image: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "host_id": str(self.host_id),
            "cleaner_profile_id": (
                str(self.cleaner_profile_id) if self.cleaner_profile_id else None
            ),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "hourly_rate": float(self.hourly_rate),
        }

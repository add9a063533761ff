"""
models/cleaning.py — Pydantic models for logged cleanings and their media.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from dustfree_shared.constants import CleaningStatus, MediaCategory, MediaType


class Cleaning(BaseModel):
    """Matches the cleanings table row.

    ``amount`` is what the host owes for the job and already includes
    ``transport_cost``.
    """

    id: UUID = Field(default_factory=uuid4)
    property_id: UUID
    cleaner_id: UUID
    scheduled_date: datetime
    completed_at: datetime | None = None
    status: CleaningStatus = "scheduled"
    duration_hours: Decimal | None = None
    amount: Decimal | None = None
    transport_cost: Decimal | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "cleaner_id": str(self.cleaner_id),
            "scheduled_date": self.scheduled_date.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "status": self.status,
            "duration_hours": _num(self.duration_hours),
            "amount": _num(self.amount),
            "transport_cost": _num(self.transport_cost),
            "notes": self.notes,
        }


class CleaningMedia(BaseModel):
    """Matches the cleaning_media table row (a reference to a stored file)."""

    id: UUID = Field(default_factory=uuid4)
    cleaning_id: UUID
    media_url: str
    media_type: MediaType = "image"
    category: MediaCategory | None = None
    captured_at: datetime | None = None
    uploaded_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "cleaning_id": str(self.cleaning_id),
            "media_url": self.media_url,
            "media_type": self.media_type,
            "category": self.category,
            "captured_at": self.captured_at.isoformat() if self.captured_at else None,
        }


def _num(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None

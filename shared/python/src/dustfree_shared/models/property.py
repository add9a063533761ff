"""
models/property.py — Pydantic models for properties and their checklists.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class Property(BaseModel):
    """Matches the properties table row."""

    id: UUID = Field(default_factory=uuid4)
    host_id: UUID
    name: str
    address: str
    description: str | None = None
    cleaner_rate_baht: Decimal = Decimal("700")   # flat payout per cleaning
    floor: str | None = None
    room_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "host_id": str(self.host_id),
            "name": self.name,
            "address": self.address,
            "description": self.description,
            "cleaner_rate_baht": float(self.cleaner_rate_baht),
            "floor": self.floor,
            "room_number": self.room_number,
        }


class PropertyTask(BaseModel):
    """Matches the property_tasks table row (one checklist item)."""

    id: UUID = Field(default_factory=uuid4)
    property_id: UUID
    task: str
    completed: bool = False
    order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "task": self.task,
            "completed": self.completed,
            "order": self.order,
        }


def property_label(name: str, floor: str | None, room_number: str | None) -> str:
    """``"Name"`` or ``"Name - 3 • 301"`` when floor/room are known."""
    parts = [p for p in (floor, room_number) if p]
    if not parts:
        return name
    return f"{name} - {' • '.join(parts)}"

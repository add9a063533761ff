"""
models/payout.py — Pydantic model for the cleaner_payouts table.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class CleanerPayout(BaseModel):
    """Matches the cleaner_payouts table row.

    One row settles one cleaning. Rows written together share ``paid_at``
    and form a batch.
    """

    id: UUID = Field(default_factory=uuid4)
    host_id: UUID
    cleaner_id: UUID
    cleaning_id: UUID
    amount: Decimal
    paid_at: datetime
    proof_of_payment_url: str | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "host_id": str(self.host_id),
            "cleaner_id": str(self.cleaner_id),
            "cleaning_id": str(self.cleaning_id),
            "amount": float(self.amount),
            "paid_at": self.paid_at.isoformat(),
            "proof_of_payment_url": self.proof_of_payment_url,
        }

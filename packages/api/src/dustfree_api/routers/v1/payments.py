"""Host endpoints for cleaner payouts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from dustfree_shared.config import settings

from dustfree_api.dependencies import AuthUser, require_host
from dustfree_api.responses import wrap_response
from dustfree_api.services import payout_service

router = APIRouter(prefix="/payments", tags=["payments"])


class PaymentIn(BaseModel):
    proof_of_payment_url: str | None = None


@router.get("/pending")
async def pending(
    user: AuthUser = Depends(require_host),
    cleaner_id: str | None = Query(None),
):
    """Money owed per cleaner for completed, unpaid cleanings."""
    data = payout_service.get_pending(user.user_id, cleaner_id=cleaner_id)
    return wrap_response(data, currency=settings.currency_symbol)


@router.get("/history")
async def history(
    user: AuthUser = Depends(require_host),
    cleaner_id: str | None = Query(None),
):
    data = payout_service.get_history(user.user_id, cleaner_id=cleaner_id)
    return wrap_response(data, total_count=len(data), currency=settings.currency_symbol)


@router.post("/{cleaner_id}", status_code=201)
async def pay_cleaner(
    cleaner_id: str,
    body: PaymentIn | None = None,
    user: AuthUser = Depends(require_host),
):
    """Mark all of a cleaner's pending cleanings as paid in one batch."""
    data = payout_service.record_payment(
        user.user_id,
        cleaner_id,
        proof_of_payment_url=body.proof_of_payment_url if body else None,
    )
    return wrap_response(data, currency=settings.currency_symbol)

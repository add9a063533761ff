"""Host analytics."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dustfree_shared.config import settings
from dustfree_shared.time_utils import today_in

from dustfree_api.dependencies import AuthUser, require_host
from dustfree_api.responses import wrap_response
from dustfree_api.services import analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/monthly-costs")
async def monthly_costs(user: AuthUser = Depends(require_host)):
    data = analytics_service.get_monthly_costs(user.user_id, today_in(settings.timezone))
    return wrap_response(data, currency=settings.currency_symbol)

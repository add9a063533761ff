"""Host endpoints for logged cleanings and the timeline view."""

from __future__ import annotations

from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from dustfree_shared.config import settings
from dustfree_shared.constants import TIMELINE_DEFAULT_DAYS
from dustfree_shared.time_utils import date_presets, today_in

from dustfree_api.dependencies import AuthUser, require_host
from dustfree_api.responses import wrap_response
from dustfree_api.services import cleaning_service, timeline_service
from dustfree_api.utils.export import csv_response, flatten_cleaning

router = APIRouter(prefix="/cleanings", tags=["cleanings"])


class AmountIn(BaseModel):
    amount: float


@router.get("")
async def list_cleanings(
    request: Request,
    user: AuthUser = Depends(require_host),
    cleaner_id: str | None = Query(None),
    format: str = Query("json", pattern="^(json|csv)$"),
):
    data = cleaning_service.list_host_cleanings(user.user_id, cleaner_id=cleaner_id)
    if format == "csv":
        return csv_response([flatten_cleaning(r) for r in data], "cleanings.csv")
    return wrap_response(
        data,
        total_count=len(data),
        currency=settings.currency_symbol,
        links={"csv": str(request.url.include_query_params(format="csv"))},
    )


@router.get("/timeline")
async def timeline(
    user: AuthUser = Depends(require_host),
    start: date | None = Query(None, alias="from"),
    end: date | None = Query(None, alias="to"),
    cleaner_id: str | None = Query(None),
    building: list[str] | None = Query(None, description="Property names to include"),
):
    """Gantt view of completed cleanings, defaulting to the last 30 days."""
    today = today_in(settings.timezone)
    end = end or today
    start = start or end - timedelta(days=TIMELINE_DEFAULT_DAYS)
    if start > end:
        raise HTTPException(status_code=422, detail="'from' must not be after 'to'")
    data = timeline_service.get_timeline(
        user.user_id, start=start, end=end, cleaner_id=cleaner_id, buildings=building
    )
    return wrap_response(data, currency=settings.currency_symbol)


@router.get("/timeline/presets")
async def timeline_presets(user: AuthUser = Depends(require_host)):
    today = today_in(settings.timezone)
    return wrap_response([p.to_dict() for p in date_presets(today)])


@router.get("/{cleaning_id}")
async def get_cleaning(cleaning_id: str, user: AuthUser = Depends(require_host)):
    return wrap_response(cleaning_service.get_host_cleaning(user.user_id, cleaning_id))


@router.patch("/{cleaning_id}/amount")
async def set_amount(cleaning_id: str, body: AmountIn, user: AuthUser = Depends(require_host)):
    return wrap_response(cleaning_service.set_amount(user.user_id, cleaning_id, body.amount))

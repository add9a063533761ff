"""Cleaner portal: log jobs, review history and earnings, payment details."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from dustfree_shared.config import settings

from dustfree_api.dependencies import get_current_cleaner
from dustfree_api.responses import wrap_response
from dustfree_api.services import (
    cleaner_service,
    cleaning_service,
    payout_service,
    property_service,
    task_service,
)
from dustfree_api.services.cleaning_service import MediaRef

router = APIRouter(prefix="/cleaner", tags=["cleaner"])


class PhotoIn(BaseModel):
    media_url: str = Field(..., min_length=1, description="Public or signed storage URL")
    captured_at: datetime | None = None


class LogCleaningIn(BaseModel):
    property_id: str
    start_photo: PhotoIn | None = None
    after_photo: PhotoIn | None = None
    transport_cost_1: float | None = Field(None, ge=0)
    transport_cost_2: float | None = Field(None, ge=0)
    receipt_main: PhotoIn | None = None
    receipt_extra: PhotoIn | None = None


class TransportIn(BaseModel):
    transport_cost_1: float | None = Field(None, ge=0)
    transport_cost_2: float | None = Field(None, ge=0)
    receipt_main: PhotoIn | None = None
    receipt_extra: PhotoIn | None = None


class TaskPatch(BaseModel):
    completed: bool


class PaymentDetailsIn(BaseModel):
    payment_details_image: str = Field(..., min_length=1)


def _refs(**photos: PhotoIn | None) -> list[MediaRef]:
    return [
        MediaRef(media_url=p.media_url, category=category, captured_at=p.captured_at)
        for category, p in photos.items()
        if p is not None
    ]


@router.get("/me")
async def me(cleaner: dict[str, Any] = Depends(get_current_cleaner)):
    """The cleaner's roster row and the properties they can log against."""
    properties = property_service.list_properties_by_name(cleaner["host_id"])
    return wrap_response({"cleaner": cleaner, "properties": properties})


@router.get("/properties/{property_id}/tasks")
async def list_tasks(property_id: str, cleaner: dict[str, Any] = Depends(get_current_cleaner)):
    property_service.get_owned_property(cleaner["host_id"], property_id)
    data = task_service.list_tasks(property_id)
    return wrap_response(data, total_count=len(data))


@router.patch("/properties/{property_id}/tasks/{task_id}")
async def toggle_task(
    property_id: str,
    task_id: str,
    body: TaskPatch,
    cleaner: dict[str, Any] = Depends(get_current_cleaner),
):
    property_service.get_owned_property(cleaner["host_id"], property_id)
    return wrap_response(task_service.set_completed(property_id, task_id, body.completed))


@router.post("/cleanings", status_code=201)
async def log_cleaning(body: LogCleaningIn, cleaner: dict[str, Any] = Depends(get_current_cleaner)):
    media = _refs(
        start=body.start_photo,
        after=body.after_photo,
        receipt_main=body.receipt_main,
        receipt_extra=body.receipt_extra,
    )
    data = cleaning_service.log_cleaning(
        cleaner,
        property_id=body.property_id,
        transport_costs=[body.transport_cost_1, body.transport_cost_2],
        media=media,
        started_at=body.start_photo.captured_at if body.start_photo else None,
    )
    return wrap_response(data, currency=settings.currency_symbol)


@router.get("/cleanings")
async def list_cleanings(cleaner: dict[str, Any] = Depends(get_current_cleaner)):
    data = cleaning_service.list_cleaner_cleanings(cleaner["id"])
    return wrap_response(data, total_count=len(data), currency=settings.currency_symbol)


@router.get("/cleanings/{cleaning_id}")
async def get_cleaning(cleaning_id: str, cleaner: dict[str, Any] = Depends(get_current_cleaner)):
    data = cleaning_service.get_cleaner_cleaning(cleaner["id"], cleaning_id)
    return wrap_response(data, currency=settings.currency_symbol)


@router.patch("/cleanings/{cleaning_id}/transport")
async def update_transport(
    cleaning_id: str,
    body: TransportIn,
    cleaner: dict[str, Any] = Depends(get_current_cleaner),
):
    data = cleaning_service.update_transport(
        cleaner["id"],
        cleaning_id,
        transport_costs=[body.transport_cost_1, body.transport_cost_2],
        receipts=_refs(receipt_main=body.receipt_main, receipt_extra=body.receipt_extra),
    )
    return wrap_response(data, currency=settings.currency_symbol)


@router.get("/salary")
async def salary(cleaner: dict[str, Any] = Depends(get_current_cleaner)):
    return wrap_response(payout_service.get_salary(cleaner), currency=settings.currency_symbol)


@router.put("/payment-details")
async def payment_details(
    body: PaymentDetailsIn, cleaner: dict[str, Any] = Depends(get_current_cleaner)
):
    cleaner_service.set_payment_details(cleaner["id"], body.payment_details_image)
    return wrap_response({**cleaner, "payment_details_image": body.payment_details_image})

"""Host endpoints for the cleaner roster."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, field_validator

from dustfree_api.dependencies import AuthUser, require_host
from dustfree_api.responses import wrap_response
from dustfree_api.services import cleaner_service

router = APIRouter(prefix="/cleaners", tags=["cleaners"])


class CleanerIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: str | None = None
    phone: str | None = None
    hourly_rate: float = Field(0, ge=0)


class CleanerPatch(BaseModel):
    name: str | None = Field(None, min_length=1)
    email: str | None = None
    phone: str | None = None
    hourly_rate: float | None = Field(None, ge=0)

    @field_validator("name", "hourly_rate")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


@router.get("")
async def list_cleaners(user: AuthUser = Depends(require_host)):
    data = cleaner_service.list_cleaners(user.user_id)
    return wrap_response(data, total_count=len(data))


@router.post("", status_code=201)
async def create_cleaner(body: CleanerIn, user: AuthUser = Depends(require_host)):
    data = cleaner_service.create_cleaner(
        user.user_id,
        name=body.name,
        email=body.email,
        phone=body.phone,
        hourly_rate=body.hourly_rate,
    )
    return wrap_response(data)


@router.patch("/{cleaner_id}")
async def update_cleaner(
    cleaner_id: str, body: CleanerPatch, user: AuthUser = Depends(require_host)
):
    data = cleaner_service.update_cleaner(
        user.user_id, cleaner_id, body.model_dump(exclude_unset=True)
    )
    return wrap_response(data)


@router.delete("/{cleaner_id}", status_code=204)
async def delete_cleaner(cleaner_id: str, user: AuthUser = Depends(require_host)):
    cleaner_service.delete_cleaner(user.user_id, cleaner_id)
    return Response(status_code=204)

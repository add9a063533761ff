"""Host endpoints for properties and their checklists."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, field_validator

from dustfree_api.dependencies import AuthUser, require_host
from dustfree_api.responses import wrap_response
from dustfree_api.services import property_service, task_service

router = APIRouter(prefix="/properties", tags=["properties"])


class PropertyIn(BaseModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    description: str | None = None
    cleaner_rate_baht: float | None = Field(None, description="Flat payout per cleaning")
    floor: str | None = None
    room_number: str | None = None


class PropertyPatch(BaseModel):
    name: str | None = Field(None, min_length=1)
    address: str | None = Field(None, min_length=1)
    description: str | None = None
    cleaner_rate_baht: float | None = None
    floor: str | None = None
    room_number: str | None = None

    @field_validator("name", "address")
    @classmethod
    def not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("cannot be null")
        return v


class TaskIn(BaseModel):
    task: str = Field(..., min_length=1)


class TaskPatch(BaseModel):
    completed: bool


@router.get("")
async def list_properties(user: AuthUser = Depends(require_host)):
    data = property_service.list_properties(user.user_id)
    return wrap_response(data, total_count=len(data))


@router.post("", status_code=201)
async def create_property(body: PropertyIn, user: AuthUser = Depends(require_host)):
    return wrap_response(property_service.create_property(user.user_id, body.model_dump()))


@router.get("/{property_id}")
async def get_property(property_id: str, user: AuthUser = Depends(require_host)):
    return wrap_response(property_service.get_owned_property(user.user_id, property_id))


@router.patch("/{property_id}")
async def update_property(
    property_id: str, body: PropertyPatch, user: AuthUser = Depends(require_host)
):
    data = property_service.update_property(
        user.user_id, property_id, body.model_dump(exclude_unset=True)
    )
    return wrap_response(data)


@router.delete("/{property_id}", status_code=204)
async def delete_property(property_id: str, user: AuthUser = Depends(require_host)):
    property_service.delete_property(user.user_id, property_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Checklist
# ---------------------------------------------------------------------------


@router.get("/{property_id}/tasks")
async def list_tasks(property_id: str, user: AuthUser = Depends(require_host)):
    property_service.get_owned_property(user.user_id, property_id)
    data = task_service.list_tasks(property_id)
    return wrap_response(data, total_count=len(data))


@router.post("/{property_id}/tasks", status_code=201)
async def add_task(property_id: str, body: TaskIn, user: AuthUser = Depends(require_host)):
    property_service.get_owned_property(user.user_id, property_id)
    return wrap_response(task_service.add_task(property_id, body.task))


@router.patch("/{property_id}/tasks/{task_id}")
async def update_task(
    property_id: str, task_id: str, body: TaskPatch, user: AuthUser = Depends(require_host)
):
    property_service.get_owned_property(user.user_id, property_id)
    return wrap_response(task_service.set_completed(property_id, task_id, body.completed))


@router.delete("/{property_id}/tasks/{task_id}", status_code=204)
async def delete_task(property_id: str, task_id: str, user: AuthUser = Depends(require_host)):
    property_service.get_owned_property(user.user_id, property_id)
    task_service.delete_task(property_id, task_id)
    return Response(status_code=204)

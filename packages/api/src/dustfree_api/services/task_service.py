"""Per-property cleaning checklists."""

from __future__ import annotations

from typing import Any

import structlog

from dustfree_shared.constants import PROPERTY_TASKS
from dustfree_shared.db import get_supabase_client
from dustfree_shared.models import PropertyTask

from dustfree_api.errors import NotFoundError

log = structlog.get_logger(__name__)


def list_tasks(property_id: str) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    result = (
        supabase.table(PROPERTY_TASKS)
        .select("*")
        .eq("property_id", property_id)
        .order("order")
        .execute()
    )
    return result.data


def get_task(property_id: str, task_id: str) -> dict[str, Any]:
    supabase = get_supabase_client()
    result = (
        supabase.table(PROPERTY_TASKS)
        .select("*")
        .eq("id", task_id)
        .eq("property_id", property_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        raise NotFoundError("Task not found")
    return result.data[0]


def add_task(property_id: str, text: str) -> dict[str, Any]:
    """Append a task to the end of the property's checklist."""
    position = len(list_tasks(property_id))
    task = PropertyTask(property_id=property_id, task=text.strip(), order=position)
    row = task.to_insert_dict()
    supabase = get_supabase_client()
    supabase.table(PROPERTY_TASKS).insert(row).execute()
    log.info("task_added", property_id=property_id, task_id=row["id"])
    return row


def set_completed(property_id: str, task_id: str, completed: bool) -> dict[str, Any]:
    task = get_task(property_id, task_id)
    supabase = get_supabase_client()
    supabase.table(PROPERTY_TASKS).update({"completed": completed}).eq("id", task_id).execute()
    return {**task, "completed": completed}


def delete_task(property_id: str, task_id: str) -> None:
    get_task(property_id, task_id)
    supabase = get_supabase_client()
    supabase.table(PROPERTY_TASKS).delete().eq("id", task_id).execute()
    log.info("task_deleted", property_id=property_id, task_id=task_id)

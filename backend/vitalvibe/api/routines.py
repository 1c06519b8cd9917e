"""
Routine API endpoints - daily routines with checkable activities.
"""

import uuid

from fastapi import APIRouter, Depends, status

from .deps import get_store, success
from ..core.errors import not_found
from ..models import RoutineCreate
from ..storage import DocumentStore

router = APIRouter(prefix="/api/routines", tags=["routines"])

ROUTINES = "routines"


async def _set_archived(store: DocumentStore, routine_id: str, archived: bool) -> dict:
    routine = await store.update(ROUTINES, routine_id, {"isArchived": archived})
    if routine is None:
        raise not_found("Routine")
    return routine


@router.get("")
async def list_routines(store: DocumentStore = Depends(get_store)):
    routines = await store.find(ROUTINES, {"isArchived": False})
    return success(routines, count=len(routines))


@router.get("/archived")
async def list_archived(store: DocumentStore = Depends(get_store)):
    routines = await store.find(ROUTINES, {"isArchived": True}, sort_by="updatedAt")
    return success(routines, count=len(routines))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_routine(entry: RoutineCreate, store: DocumentStore = Depends(get_store)):
    document = entry.to_document()
    document["activities"] = [
        {"id": uuid.uuid4().hex, **activity} for activity in document["activities"]
    ]
    document["isActive"] = True
    document["isArchived"] = False
    saved = await store.insert(ROUTINES, document)
    return success(saved)


@router.put("/{routine_id}/toggle/{activity_id}")
async def toggle_activity(routine_id: str, activity_id: str,
                          store: DocumentStore = Depends(get_store)):
    """Flip the ``completed`` flag of one activity."""
    routine = await store.get(ROUTINES, routine_id)
    if routine is None:
        raise not_found("Routine")

    activities = [dict(activity) for activity in routine.get("activities", [])]
    for activity in activities:
        if activity.get("id") == activity_id:
            activity["completed"] = not activity.get("completed", False)
            break
    else:
        raise not_found("Activity")

    updated = await store.update(ROUTINES, routine_id, {"activities": activities})
    return success(updated)


@router.put("/{routine_id}/archive")
async def archive_routine(routine_id: str, store: DocumentStore = Depends(get_store)):
    return success(await _set_archived(store, routine_id, True))


@router.put("/{routine_id}/restore")
async def restore_routine(routine_id: str, store: DocumentStore = Depends(get_store)):
    return success(await _set_archived(store, routine_id, False))


@router.delete("/{routine_id}")
async def delete_routine(routine_id: str, store: DocumentStore = Depends(get_store)):
    if not await store.delete(ROUTINES, routine_id):
        raise not_found("Routine")
    return success(message="Deleted")

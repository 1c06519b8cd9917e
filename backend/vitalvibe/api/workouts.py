"""
Workout API endpoints.
"""

import datetime as dt

from fastapi import APIRouter, Depends, Query, status

from .deps import get_settings, get_store, success
from .moods import day_range
from ..config import Settings
from ..core.errors import not_found
from ..core.validation import validate
from ..models import WorkoutCreate, as_datetime
from ..storage import DocumentStore

router = APIRouter(prefix="/api/workouts", tags=["workouts"])

WORKOUTS = "workouts"


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_workout(
    entry: WorkoutCreate,
    store: DocumentStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """Record a completed workout; ``date`` becomes its ``startTime``."""
    validate(entry, config.validation_policy)
    start = as_datetime(entry.date)

    document = entry.to_document()
    document.pop("date", None)
    document["name"] = entry.name or entry.type
    document["startTime"] = start.isoformat()
    document["endTime"] = (start + dt.timedelta(minutes=entry.duration)).isoformat()
    document["completed"] = True
    saved = await store.insert(WORKOUTS, document)
    return success(saved)


@router.get("/{user_id}")
async def list_workouts(user_id: str, store: DocumentStore = Depends(get_store)):
    workouts = await store.find(WORKOUTS, {"userId": user_id})
    return success(workouts, count=len(workouts))


@router.get("/{user_id}/range")
async def workouts_in_range(
    user_id: str,
    start: dt.date = Query(...),
    end: dt.date = Query(...),
    store: DocumentStore = Depends(get_store),
):
    workouts = await store.find(WORKOUTS, {"userId": user_id, "startTime": day_range(start, end)})
    return success(workouts, count=len(workouts))


@router.delete("/{workout_id}")
async def delete_workout(workout_id: str, store: DocumentStore = Depends(get_store)):
    if not await store.delete(WORKOUTS, workout_id):
        raise not_found("Workout")
    return success(message="Workout deleted")

"""
Nutrition API endpoints - meal logging.
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from .deps import get_store, success
from ..core.errors import validation_failed
from ..models import NutritionCreate
from ..storage import DocumentStore

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])

NUTRITION = "nutrition"


@router.get("/{user_id}")
async def list_meals(
    user_id: str,
    date: Optional[dt.date] = Query(None),
    start: Optional[dt.date] = Query(None),
    end: Optional[dt.date] = Query(None),
    store: DocumentStore = Depends(get_store),
):
    """Meals of a user: one day with ``date``, a span with ``start`` and ``end``, else all."""
    filters = {"userId": user_id}
    if date:
        filters["date"] = date.isoformat()
    elif start and end:
        filters["date"] = {"$gte": start.isoformat(), "$lte": end.isoformat()}
    elif start or end:
        raise validation_failed(
            [{"field": "start" if end else "end", "message": "start and end must be given together"}]
        )
    meals = await store.find(NUTRITION, filters)
    return success(meals, count=len(meals))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(entry: NutritionCreate, store: DocumentStore = Depends(get_store)):
    saved = await store.insert(NUTRITION, entry.to_document())
    return success(saved)

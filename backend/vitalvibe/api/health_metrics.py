"""
Health metrics API endpoints - daily activity, sleep, heart rate and hydration.
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from .deps import get_settings, get_store, success
from ..config import Settings
from ..core.validation import validate
from ..models import HealthMetricsCreate, as_datetime
from ..storage import DocumentStore

router = APIRouter(prefix="/api/health-metrics", tags=["health-metrics"])

HEALTH_METRICS = "healthmetrics"


@router.get("/{user_id}")
async def list_metrics(
    user_id: str,
    start_date: Optional[dt.date] = Query(None, alias="startDate"),
    end_date: Optional[dt.date] = Query(None, alias="endDate"),
    limit: int = Query(30, ge=1, le=1000),
    store: DocumentStore = Depends(get_store),
):
    filters = {"userId": user_id}
    date_filter = {}
    if start_date:
        date_filter["$gte"] = as_datetime(start_date)
    if end_date:
        date_filter["$lt"] = as_datetime(end_date) + dt.timedelta(days=1)
    if date_filter:
        filters["date"] = date_filter

    metrics = await store.find(HEALTH_METRICS, filters, sort_by="date", limit=limit)
    return success(metrics, count=len(metrics))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_metrics(
    entry: HealthMetricsCreate,
    store: DocumentStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    validate(entry, config.validation_policy)
    document = entry.to_document()
    document["date"] = as_datetime(entry.date).isoformat()
    saved = await store.insert(HEALTH_METRICS, document)
    return success(saved)

"""
Mood API endpoints - mood journal with AI commentary.
"""

import datetime as dt
import logging

from fastapi import APIRouter, Depends, Query, status

from .deps import get_mood_agent, get_settings, get_store, success
from ..agents import MoodAnalysisAgent
from ..config import Settings
from ..core.errors import not_found, validation_failed
from ..core.local_sentiment import analyze_sentiment, extract_health_keywords
from ..core.trends import analyze_trends
from ..core.validation import validate
from ..models import MoodCreate, SentimentRequest, as_datetime, utc_now, utc_today
from ..storage import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/moods", tags=["moods"])

MOODS = "moods"


def day_range(start: dt.date, end: dt.date) -> dict:
    """Filter matching ``start`` through the whole of ``end``."""
    return {"$gte": as_datetime(start), "$lt": as_datetime(end) + dt.timedelta(days=1)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_mood(
    entry: MoodCreate,
    store: DocumentStore = Depends(get_store),
    agent: MoodAnalysisAgent = Depends(get_mood_agent),
    config: Settings = Depends(get_settings),
):
    """
    Record a mood entry with its AI annotation.

    The annotation is produced once, here, and never rewritten.
    """
    validate(entry, config.validation_policy)
    annotation = await agent.analyze_mood(entry)

    document = entry.to_document()
    document["time"] = utc_now().strftime("%H:%M")
    document["aiAnalysis"] = annotation.to_document()
    saved = await store.insert(MOODS, document)

    logger.info(
        f"Mood entry saved for {entry.user_id}",
        extra={"extra_fields": {"mood_id": saved["id"], "annotation_source": annotation.source}}
    )
    return success(saved, message="Mood entry created")


@router.post("/sentiment")
async def local_sentiment(request: SentimentRequest):
    """Keyword-based sentiment for free text."""
    try:
        result = analyze_sentiment(request.text)
    except ValueError as e:
        raise validation_failed([{"field": "text", "message": str(e)}], message=str(e))
    result["keywords"] = extract_health_keywords(request.text)
    return success(result)


@router.get("/{user_id}")
async def list_moods(user_id: str, store: DocumentStore = Depends(get_store)):
    moods = await store.find(MOODS, {"userId": user_id})
    return success(moods, count=len(moods))


@router.get("/{user_id}/range")
async def moods_in_range(
    user_id: str,
    start: dt.date = Query(...),
    end: dt.date = Query(...),
    store: DocumentStore = Depends(get_store),
):
    moods = await store.find(MOODS, {"userId": user_id, "date": day_range(start, end)})
    return success(moods, count=len(moods))


@router.get("/{user_id}/trends")
async def mood_trends(
    user_id: str,
    days: int = Query(7, ge=1, le=365),
    store: DocumentStore = Depends(get_store),
):
    """Aggregate the last ``days`` days; ``data`` is null when there are no entries."""
    since = as_datetime(utc_today() - dt.timedelta(days=days))
    moods = await store.find(MOODS, {"userId": user_id, "date": {"$gte": since}})
    return {"success": True, "data": analyze_trends(moods)}


@router.delete("/{mood_id}")
async def delete_mood(mood_id: str, store: DocumentStore = Depends(get_store)):
    if not await store.delete(MOODS, mood_id):
        raise not_found("Mood entry")
    return success(message="Mood deleted")

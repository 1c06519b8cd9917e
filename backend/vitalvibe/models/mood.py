"""
Mood Models - mood entries and their AI annotation.
"""

import datetime as dt
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from .base import CamelModel, utc_now, utc_today

RiskLevel = Literal["low", "medium", "high"]
AnnotationSource = Literal["model", "salvaged", "fallback"]


class AIAnnotation(CamelModel):
    """Commentary attached to a mood entry at creation time; never edited afterwards."""
    sentiment: str
    advice: str
    insights: List[str]
    risk_level: RiskLevel
    generated_at: dt.datetime = Field(default_factory=utc_now)
    source: AnnotationSource = "model"


class MoodContext(CamelModel):
    stress_level: Optional[int] = None
    energy_level: Optional[int] = None
    gratitude: Optional[str] = None


class MoodCreate(CamelModel):
    """Mood entry as submitted by the client."""
    user_id: str = Field(..., min_length=1)
    date: dt.date = Field(default_factory=utc_today)
    mood: str = Field(..., min_length=1, max_length=50)
    intensity: int
    notes: Optional[str] = Field(None, max_length=2000)
    triggers: List[str] = Field(default_factory=list)
    emotions: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    is_private: bool = True
    context: Optional[MoodContext] = None

    @field_validator("mood")
    @classmethod
    def normalize_mood(cls, value: str) -> str:
        return value.strip().lower()


class SentimentRequest(CamelModel):
    text: str = Field(..., min_length=1)

"""
Health Data Models - symptoms, workouts, meals and daily metrics.
"""

import datetime as dt
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field, model_validator

from .base import CamelModel, utc_now


# Symptoms

class SymptomItem(CamelModel):
    name: str = Field(..., min_length=1)
    severity: Literal["mild", "moderate", "severe"] = "mild"
    severity_score: Optional[int] = None
    duration: Optional[str] = None
    body_part: Optional[str] = None


class SymptomAnalysis(CamelModel):
    query: Optional[str] = None
    response: Optional[str] = None
    possible_conditions: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    urgency: Optional[Literal["low", "medium", "high", "emergency"]] = None


class SymptomCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    date: dt.datetime = Field(default_factory=utc_now)
    symptoms: List[SymptomItem] = Field(..., min_length=1)
    ai_analysis: Optional[SymptomAnalysis] = None
    notes: Optional[str] = None
    resolved: bool = False
    follow_up_required: bool = False


class DiagnoseRequest(CamelModel):
    """One patient turn of the triage conversation."""
    symptoms: Union[str, List[str]]
    session_id: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def message(self) -> str:
        if isinstance(self.symptoms, list):
            return ", ".join(str(s) for s in self.symptoms)
        return str(self.symptoms)


# Workouts

class WorkoutCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    date: Union[dt.datetime, dt.date] = Field(default_factory=utc_now)
    type: str = Field(..., min_length=1)
    name: Optional[str] = None
    category: Optional[str] = None
    duration: int
    distance: float = 0
    calories: float = 0
    intensity: Literal["low", "moderate", "medium", "high", "intense"] = "moderate"
    avg_heart_rate: Optional[int] = None
    max_heart_rate: Optional[int] = None
    notes: Optional[str] = Field(None, max_length=1000)
    source: Literal["fitbit", "googlefit", "manual"] = "manual"


# Nutrition

class Nutrients(CamelModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class FoodItem(CamelModel):
    name: str
    brand: Optional[str] = None
    serving_size: Optional[float] = None
    serving_unit: Optional[str] = None
    quantity: float = 1
    nutrients: Nutrients = Field(default_factory=Nutrients)


class NutritionCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    meal_type: Literal["breakfast", "lunch", "dinner", "snack"] = "snack"
    meal_name: str = Field(..., min_length=1)
    foods: List[FoodItem] = Field(default_factory=list)
    totals: Optional[Nutrients] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def fill_totals(self) -> "NutritionCreate":
        """Sum food nutrients when the client sends no totals."""
        if self.totals is None:
            totals = Nutrients()
            for food in self.foods:
                totals.calories += food.nutrients.calories * food.quantity
                totals.protein += food.nutrients.protein * food.quantity
                totals.carbs += food.nutrients.carbs * food.quantity
                totals.fat += food.nutrients.fat * food.quantity
            self.totals = totals
        return self


# Daily metrics

class HeartRate(CamelModel):
    resting: Optional[float] = None
    average: Optional[float] = None
    max: Optional[float] = None
    min: Optional[float] = None


class Sleep(CamelModel):
    total_minutes: Optional[int] = None
    minutes_asleep: Optional[int] = None
    minutes_awake: Optional[int] = None
    efficiency: Optional[float] = None
    quality: Optional[Literal["poor", "fair", "good", "excellent"]] = None


class Hydration(CamelModel):
    amount: float = 0  # ml
    goal: float = 2500  # ml


class Weight(CamelModel):
    value: Optional[float] = None
    bmi: Optional[float] = None
    body_fat: Optional[float] = None


class HealthMetricsCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    date: Union[dt.datetime, dt.date] = Field(default_factory=utc_now)
    steps: int = 0
    distance: float = 0
    floors: int = 0
    active_minutes: int = 0
    calories: float = 0
    heart_rate: Optional[HeartRate] = None
    sleep: Optional[Sleep] = None
    hydration: Optional[Hydration] = None
    weight: Optional[Weight] = None
    source: Literal["fitbit", "googlefit", "applehealth", "manual", "imported"] = "manual"
    notes: Optional[str] = None


# Routines

class RoutineActivityIn(CamelModel):
    name: str = Field(..., min_length=1)
    duration: Optional[str] = None
    completed: bool = False


class RoutineCreate(CamelModel):
    user_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: str = ""
    time: str = "08:00"
    type: Literal["morning", "evening", "workout", "meditation", "custom"] = "custom"
    activities: List[RoutineActivityIn] = Field(default_factory=list)


# Notifications

class NotificationCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: Literal["goal", "reminder", "health", "sync", "achievement", "system", "push", "email"] = "system"
    data: Dict[str, Any] = Field(default_factory=dict)
    priority: Literal["low", "medium", "high"] = "medium"


class PushRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)


class EmailRequest(CamelModel):
    user_id: Optional[str] = None
    email: str = Field(..., min_length=3)
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

"""Models module."""

from .base import CamelModel, as_datetime, utc_now, utc_today
from .mood import AIAnnotation, MoodCreate, MoodContext, SentimentRequest
from .health import (
    SymptomItem, SymptomAnalysis, SymptomCreate, DiagnoseRequest,
    WorkoutCreate, Nutrients, FoodItem, NutritionCreate,
    HeartRate, Sleep, Hydration, Weight, HealthMetricsCreate,
    RoutineActivityIn, RoutineCreate,
    NotificationCreate, PushRequest, EmailRequest,
)
from .session import ChatTurn, SessionCreate, ChatLogRequest
from .user import Goals, UserCreate, LoginRequest, UserUpdate, default_profile, public_user

__all__ = [
    'CamelModel', 'as_datetime', 'utc_now', 'utc_today',
    'AIAnnotation', 'MoodCreate', 'MoodContext', 'SentimentRequest',
    'SymptomItem', 'SymptomAnalysis', 'SymptomCreate', 'DiagnoseRequest',
    'WorkoutCreate', 'Nutrients', 'FoodItem', 'NutritionCreate',
    'HeartRate', 'Sleep', 'Hydration', 'Weight', 'HealthMetricsCreate',
    'RoutineActivityIn', 'RoutineCreate',
    'NotificationCreate', 'PushRequest', 'EmailRequest',
    'ChatTurn', 'SessionCreate', 'ChatLogRequest',
    'Goals', 'UserCreate', 'LoginRequest', 'UserUpdate', 'default_profile', 'public_user',
]

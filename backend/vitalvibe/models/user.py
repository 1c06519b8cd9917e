"""
User Model - Defines the user data structure.
"""

import datetime as dt
from typing import Any, Dict, Literal, Optional

from pydantic import EmailStr, Field

from .base import CamelModel


class Goals(CamelModel):
    daily_steps: int = Field(10000, ge=0)
    daily_water: float = Field(2.5, ge=0)  # liters
    sleep_hours: float = Field(8, ge=0, le=24)
    daily_calories: int = Field(2000, ge=0)
    weekly_workouts: int = Field(5, ge=0)
    target_weight: Optional[float] = None


class UserCreate(CamelModel):
    """Registration payload."""
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpdate(CamelModel):
    """Profile update - all fields optional."""
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)
    name: Optional[str] = None
    date_of_birth: Optional[dt.date] = None
    gender: Optional[Literal["male", "female", "other", "prefer-not-to-say"]] = None
    height: Optional[float] = None  # cm
    weight: Optional[float] = None  # kg
    blood_type: Optional[Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]] = None
    location: Optional[Dict[str, Any]] = None
    bio: Optional[str] = Field(None, max_length=500)
    phone_number: Optional[str] = None
    goals: Optional[Goals] = None
    settings: Optional[Dict[str, Any]] = None


def default_profile() -> Dict[str, Any]:
    """Fields every new account starts with."""
    return {
        "goals": Goals().to_document(),
        "integrations": {
            "fitbit": {"connected": False},
            "googleFit": {"connected": False},
        },
        "settings": {
            "theme": "dark",
            "language": "en",
            "notifications": {"push": True, "email": False, "sms": False, "reminders": True},
            "units": {"temperature": "celsius", "distance": "km", "weight": "kg", "height": "cm"},
        },
    }


_SECRET_FIELDS = ("password", "verificationToken", "resetPasswordToken")
_INTEGRATION_SECRETS = ("accessToken", "refreshToken")


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a user document without password hash or provider tokens."""
    cleaned = {k: v for k, v in user.items() if k not in _SECRET_FIELDS}
    integrations = cleaned.get("integrations")
    if isinstance(integrations, dict):
        cleaned["integrations"] = {
            provider: {k: v for k, v in values.items() if k not in _INTEGRATION_SECRETS}
            if isinstance(values, dict) else values
            for provider, values in integrations.items()
        }
    return cleaned

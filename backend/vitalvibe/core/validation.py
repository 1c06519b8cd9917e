"""
Range checks for submitted health data.

Checks always run and return a list of ``{field, message}`` problems;
``apply_policy`` decides what happens to them:

* ``off``: ignored
* ``warn``: logged, the entry is accepted
* ``enforce``: the request fails with a validation error
"""

import logging
from typing import Any, Dict, List, Optional

from .errors import validation_failed
from ..models.health import HealthMetricsCreate, WorkoutCreate
from ..models.mood import MoodCreate

logger = logging.getLogger(__name__)

POLICIES = ("off", "warn", "enforce")

HEART_RATE_RANGE = (30, 220)
SLEEP_HOURS_RANGE = (0, 24)
STEPS_RANGE = (0, 100000)
HYDRATION_ML_RANGE = (0, 10000)
WORKOUT_DURATION_RANGE = (1, 600)
WORKOUT_CALORIES_RANGE = (0, 5000)
MOOD_INTENSITY_RANGE = (1, 10)

Problem = Dict[str, str]


def _in_range(value: Optional[float], bounds) -> bool:
    return value is None or bounds[0] <= value <= bounds[1]


def _problem(field: str, message: str) -> Problem:
    return {"field": field, "message": message}


def check_health_metrics(entry: HealthMetricsCreate) -> List[Problem]:
    problems = []
    if entry.heart_rate is not None:
        for name in ("resting", "average", "max", "min"):
            if not _in_range(getattr(entry.heart_rate, name), HEART_RATE_RANGE):
                problems.append(_problem(f"heartRate.{name}", "Heart rate must be between 30-220 bpm"))
    if entry.sleep is not None:
        for name, alias in (("total_minutes", "totalMinutes"), ("minutes_asleep", "minutesAsleep")):
            minutes = getattr(entry.sleep, name)
            if minutes is not None and not _in_range(minutes / 60, SLEEP_HOURS_RANGE):
                problems.append(_problem(f"sleep.{alias}", "Sleep hours must be between 0-24"))
    if not _in_range(entry.steps, STEPS_RANGE):
        problems.append(_problem("steps", "Steps must be between 0-100000"))
    if entry.hydration is not None and not _in_range(entry.hydration.amount, HYDRATION_ML_RANGE):
        problems.append(_problem("hydration.amount", "Hydration must be between 0-10 liters"))
    return problems


def check_workout(entry: WorkoutCreate) -> List[Problem]:
    problems = []
    if not _in_range(entry.duration, WORKOUT_DURATION_RANGE):
        problems.append(_problem("duration", "Duration must be between 1-600 minutes"))
    if not _in_range(entry.calories, WORKOUT_CALORIES_RANGE):
        problems.append(_problem("calories", "Calories must be between 0-5000"))
    return problems


def check_mood(entry: MoodCreate) -> List[Problem]:
    if not _in_range(entry.intensity, MOOD_INTENSITY_RANGE):
        return [_problem("intensity", "Intensity must be between 1-10")]
    return []


def apply_policy(problems: List[Problem], policy: str, what: str) -> None:
    """
    Act on range-check problems according to ``policy``.

    Raises:
        AppError: validation kind, when ``policy`` is "enforce" and there are problems
        ValueError: for an unknown policy name
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown validation policy: {policy}")
    if not problems or policy == "off":
        return
    if policy == "warn":
        logger.warning(
            f"Accepting {what} with out-of-range values",
            extra={"extra_fields": {"event": "validation_warning", "entity": what, "problems": problems}}
        )
        return
    raise validation_failed(problems, message=f"Invalid {what} data")


def validate(entry: Any, policy: str) -> None:
    """Run the checks matching ``entry``'s type and apply ``policy``."""
    if isinstance(entry, HealthMetricsCreate):
        apply_policy(check_health_metrics(entry), policy, "health metrics")
    elif isinstance(entry, WorkoutCreate):
        apply_policy(check_workout(entry), policy, "workout")
    elif isinstance(entry, MoodCreate):
        apply_policy(check_mood(entry), policy, "mood")
    else:
        raise TypeError(f"No range checks for {type(entry).__name__}")

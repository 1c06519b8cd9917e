"""
Response Parser - turns free model text into a complete mood annotation.

Three tiers, all yielding the same ``AIAnnotation`` shape:

* ``model``: the text contains a JSON object; its fields are used and any
  missing or malformed field is filled from the generic defaults.
* ``salvaged``: no parseable object; the raw text becomes the advice.
* ``fallback``: the model could not be called at all; the static table
  keyed by mood label answers instead.
"""

import json
import re
from typing import Any, Dict, Optional

from .fallbacks import (
    GENERIC_ADVICE,
    GENERIC_INSIGHTS,
    GENERIC_SENTIMENT,
    mood_fallback,
    threshold_risk,
)
from ..models.mood import AIAnnotation

# Greedy: first "{" through last "}" so nested objects stay intact
_JSON_SPAN = re.compile(r"\{[\s\S]*\}")

_RISK_LEVELS = ("low", "medium", "high")
_SALVAGE_LENGTH = 500


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Return the JSON object embedded in ``text``, or None."""
    if not text:
        return None
    match = _JSON_SPAN.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _text_field(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _insights_field(data: Dict[str, Any]) -> list:
    value = data.get("insights")
    if isinstance(value, list):
        insights = [str(item).strip() for item in value if str(item).strip()]
        if insights:
            return insights
    return list(GENERIC_INSIGHTS)


def _risk_field(data: Dict[str, Any], intensity: int) -> str:
    value = data.get("riskLevel", data.get("risk_level"))
    if isinstance(value, str) and value.strip().lower() in _RISK_LEVELS:
        return value.strip().lower()
    return threshold_risk(intensity)


def salvage_annotation(text: str, intensity: int) -> AIAnnotation:
    """Annotation built from unstructured model text."""
    advice = (text or "").strip()[:_SALVAGE_LENGTH] or GENERIC_ADVICE
    return AIAnnotation(
        sentiment=GENERIC_SENTIMENT,
        advice=advice,
        insights=list(GENERIC_INSIGHTS),
        risk_level=threshold_risk(intensity),
        source="salvaged",
    )


def parse_mood_response(text: str, intensity: int) -> AIAnnotation:
    """
    Parse model output into an annotation.

    Args:
        text: Raw model reply
        intensity: Mood intensity of the entry, used for default risk

    Returns:
        AIAnnotation with ``source`` "model" or "salvaged"
    """
    data = extract_json_object(text)
    if data is None:
        return salvage_annotation(text, intensity)
    return AIAnnotation(
        sentiment=_text_field(data, "sentiment", GENERIC_SENTIMENT),
        advice=_text_field(data, "advice", GENERIC_ADVICE),
        insights=_insights_field(data),
        risk_level=_risk_field(data, intensity),
        source="model",
    )


def fallback_annotation(mood: str, intensity: int) -> AIAnnotation:
    """Annotation from the static table when the model is unavailable."""
    entry = mood_fallback(mood, intensity)
    return AIAnnotation(
        sentiment=entry["sentiment"],
        advice=entry["advice"],
        insights=entry["insights"],
        risk_level=entry["riskLevel"],
        source="fallback",
    )

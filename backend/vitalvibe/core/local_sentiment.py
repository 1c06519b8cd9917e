"""
Local Sentiment - keyword-count sentiment scoring, no external service.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List

POSITIVE_WORDS = (
    "good", "great", "excellent", "amazing", "wonderful", "awesome",
    "happy", "love", "fantastic", "perfect", "brilliant", "superb",
    "delighted", "thrilled", "best", "beautiful",
    "healthy", "fit", "strong", "energetic", "motivated",
)

NEGATIVE_WORDS = (
    "bad", "terrible", "awful", "horrible", "poor", "sad",
    "hate", "disappointed", "frustrated", "angry", "worst",
    "disgusting", "painful", "weak", "tired", "exhausted",
    "sick", "ill", "unwell", "depressed", "anxious",
)

HEALTH_CONCERN_WORDS = ("pain", "illness", "sick", "disease", "injury")

HEALTH_KEYWORDS = {
    "symptoms": ("pain", "fever", "cough", "headache", "nausea"),
    "activities": ("exercise", "running", "walking", "workout", "gym"),
    "nutrition": ("breakfast", "lunch", "dinner", "snack", "meal"),
    "emotions": ("happy", "sad", "stressed", "anxious", "calm"),
}


def _count(word: str, text: str) -> int:
    return len(re.findall(rf"\b{re.escape(word)}\b", text))


def recommendation(score: int, concerns: List[str]) -> Dict[str, str]:
    if concerns:
        return {
            "type": "health-warning",
            "message": f"Detected health concerns: {', '.join(concerns)}",
            "action": "Consider consulting a healthcare provider",
        }
    if score > 5:
        return {
            "type": "positive",
            "message": "Great mood! Keep up the good habits.",
            "action": "Continue your current exercise and nutrition routine",
        }
    if score < -5:
        return {
            "type": "concern",
            "message": "You seem stressed or unwell.",
            "action": "Try relaxation techniques or consult a professional",
        }
    return {
        "type": "neutral",
        "message": "Your mood is neutral.",
        "action": "Monitor your wellbeing regularly",
    }


def analyze_sentiment(text: str) -> Dict[str, Any]:
    """
    Score ``text`` by counting positive and negative words.

    Raises:
        ValueError: if ``text`` is blank
    """
    if not text or not text.strip():
        raise ValueError("Text is required for sentiment analysis")

    lower = text.lower()
    score = 0
    details = []
    for word in POSITIVE_WORDS:
        hits = _count(word, lower)
        if hits:
            score += hits
            details.append(f"positive: {word} ({hits})")
    for word in NEGATIVE_WORDS:
        hits = _count(word, lower)
        if hits:
            score -= hits
            details.append(f"negative: {word} ({hits})")

    # Substring match, so "painful" also flags "pain"
    concerns = [word for word in HEALTH_CONCERN_WORDS if word in lower]

    if score > 0:
        sentiment = "positive"
    elif score < 0:
        sentiment = "negative"
    else:
        sentiment = "neutral"

    return {
        "score": score,
        "magnitude": abs(score),
        "sentiment": sentiment,
        "confidence": min(abs(score) / 10, 1),
        "details": details,
        "healthConcerns": concerns,
        "recommendation": recommendation(score, concerns),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def extract_health_keywords(text: str) -> Dict[str, List[str]]:
    """Health keywords found in ``text``, grouped by category."""
    lower = (text or "").lower()
    return {
        category: [keyword for keyword in keywords if keyword in lower]
        for category, keywords in HEALTH_KEYWORDS.items()
    }

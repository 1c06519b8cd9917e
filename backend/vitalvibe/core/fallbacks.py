"""
Canned responses used when the language model cannot be reached.
"""

import random
from typing import Any, Dict, List, Optional

GENERIC_SENTIMENT = "Your mood has been recorded."
GENERIC_ADVICE = "Take a moment to notice how you feel and be kind to yourself today."
GENERIC_INSIGHTS = [
    "Stay mindful of your emotions",
    "Practice self-care",
    "Reach out to support if needed",
]

_MOOD_TABLE: Dict[str, Dict[str, Any]] = {
    "happy": {
        "sentiment": "You're feeling positive! This is wonderful.",
        "advice": (
            "Keep doing what brings you joy and positivity. Consider journaling about "
            "what went well today to reinforce positive patterns."
        ),
        "insights": [
            "Share your happiness with loved ones",
            "Document positive moments for future reflection",
            "Maintain healthy habits that contribute to your wellbeing",
        ],
    },
    "sad": {
        "sentiment": "You're experiencing sadness. It's okay to feel this way.",
        "advice": (
            "Allow yourself to feel these emotions without judgment. Consider talking to "
            "someone you trust or engaging in activities that usually comfort you."
        ),
        "insights": [
            "Practice self-compassion and gentle self-care",
            "Reach out to friends or family for support",
            "Engage in light physical activity like walking",
        ],
    },
    "anxious": {
        "sentiment": "You're feeling anxious. This is a common experience.",
        "advice": (
            "Try grounding techniques like deep breathing (4 seconds in, 6 seconds out). "
            "Focus on what you can control right now."
        ),
        "insights": [
            "Practice 5-minute mindfulness meditation",
            "Use the 5-4-3-2-1 grounding technique",
            "Limit caffeine and maintain regular sleep",
        ],
    },
    "angry": {
        "sentiment": "You're experiencing anger. Let's process this constructively.",
        "advice": (
            "Take deep breaths and step away from triggers if possible. Physical activity "
            "or journaling can help process these feelings."
        ),
        "insights": [
            "Channel anger into physical exercise",
            "Write down what's bothering you without filter",
            "Practice progressive muscle relaxation",
        ],
    },
    "tired": {
        "sentiment": "You're feeling fatigued. Rest is important.",
        "advice": (
            "Prioritize quality sleep tonight. Avoid screens 1 hour before bed and "
            "maintain a consistent sleep schedule."
        ),
        "insights": [
            "Ensure 7-9 hours of quality sleep",
            "Stay hydrated throughout the day",
            "Take short breaks during demanding activities",
        ],
    },
    "neutral": {
        "sentiment": "You're feeling neutral today. Balance is valuable.",
        "advice": (
            "Use this calm state to engage in activities you enjoy or to plan for the "
            "week ahead. Maintain healthy routines."
        ),
        "insights": [
            "Practice gratitude to enhance positive emotions",
            "Engage in creative or refreshing activities",
            "Plan self-care activities for the coming days",
        ],
    },
}

SYMPTOM_FALLBACK_RESPONSES = [
    "I'm here to help you feel better. Tell me, when did these symptoms start? And is this something new or have you experienced it before?",
    "Thank you for sharing that. To give you better guidance, could you describe how intense these symptoms are? Are they mild, moderate, or severe?",
    "I hear you. Let me ask a few more questions to understand your situation better. Have you experienced any fever, or are there any other symptoms happening at the same time?",
    "That sounds uncomfortable. Is this affecting your daily activities? And have you tried anything to help, or taken any medicines?",
    "I understand. These symptoms can be concerning. Have you noticed if anything makes them better or worse? Like rest, food, or certain activities?",
    "Based on what you're telling me, it could be several things. How long exactly have you been experiencing this? And have you had a temperature?",
    "That's helpful information. Are you taking any medications currently? And do you have any existing health conditions I should know about?",
    "I see. It's good that you're paying attention to these symptoms. Have you had any recent changes in your diet, sleep, or stress levels?",
]


def known_moods() -> List[str]:
    return sorted(_MOOD_TABLE)


def threshold_risk(intensity: int) -> str:
    """Risk level used when the model gives no usable one."""
    return "medium" if intensity >= 8 else "low"


def _table_risk(mood: str, intensity: int) -> str:
    if mood == "sad":
        return "medium" if intensity >= 7 else "low"
    if mood == "anxious":
        return "high" if intensity >= 8 else "medium"
    if mood == "angry":
        return "medium" if intensity >= 8 else "low"
    return "low"


def mood_fallback(mood: str, intensity: int) -> Dict[str, Any]:
    """
    Static advice for a mood label.

    Unknown labels get the ``neutral`` entry. Returns a fresh dict with
    ``sentiment``, ``advice``, ``insights`` and ``riskLevel``.
    """
    key = (mood or "").strip().lower()
    if key not in _MOOD_TABLE:
        key = "neutral"
    entry = _MOOD_TABLE[key]
    return {
        "sentiment": entry["sentiment"],
        "advice": entry["advice"],
        "insights": list(entry["insights"]),
        "riskLevel": _table_risk(key, intensity),
    }


def symptom_fallback(rng: Optional[random.Random] = None) -> str:
    """One clarifying question, chosen at random."""
    return (rng or random).choice(SYMPTOM_FALLBACK_RESPONSES)

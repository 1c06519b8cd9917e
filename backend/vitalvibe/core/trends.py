"""
Mood trend aggregation.
"""

from collections import Counter
from typing import Any, Dict, Iterable, Mapping, Optional


def analyze_trends(moods: Iterable[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Summarize mood entries.

    Args:
        moods: Mood documents with ``mood`` and ``intensity``

    Returns:
        ``averageIntensity`` (one-decimal string), ``dominantMood``,
        ``totalEntries`` and ``moodDistribution``; None for no entries.
        Equal counts resolve to the alphabetically first label.
    """
    moods = list(moods)
    if not moods:
        return None

    total = sum(float(m.get("intensity") or 0) for m in moods)
    distribution = Counter(str(m.get("mood", "")) for m in moods)
    dominant = min(distribution, key=lambda label: (-distribution[label], label))

    return {
        "averageIntensity": f"{round(total / len(moods), 1):.1f}",
        "dominantMood": dominant,
        "totalEntries": len(moods),
        "moodDistribution": dict(sorted(distribution.items())),
    }

"""
Fallback Monitor - counts and logs every time an AI flow degrades.
"""

import logging
import threading
from collections import Counter
from typing import Dict

logger = logging.getLogger(__name__)


class FallbackMonitor:
    """In-process counters keyed by ``<flow>.<tier>``."""

    def __init__(self):
        self._counts: Counter = Counter()
        self._lock = threading.Lock()

    def record(self, flow: str, tier: str, reason: str) -> None:
        """
        Record one fallback.

        Args:
            flow: "mood" or "symptom"
            tier: "salvaged" or "fallback"
            reason: Short description of what went wrong
        """
        with self._lock:
            self._counts[f"{flow}.{tier}"] += 1
        logger.warning(
            f"AI {flow} flow degraded to {tier}: {reason}",
            extra={"extra_fields": {
                "event": "ai_fallback",
                "flow": flow,
                "tier": tier,
                "reason": reason,
            }}
        )

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


fallback_monitor = FallbackMonitor()

"""
Mood Analysis Agent - one-shot commentary on a mood entry.
"""

from .base_agent import BaseAgent
from ..core.response_parser import fallback_annotation, parse_mood_response
from ..llm.base import ModelError, ModelUnavailable
from ..models.mood import AIAnnotation, MoodCreate


MOOD_PROMPT = """You are a compassionate mental health advisor. Analyze this mood entry and provide personalized advice.

Mood Entry:
- Mood: {mood}
- Intensity: {intensity}/10
- Notes: {notes}
- Triggers: {triggers}
- Date: {date}

Please provide:
1. A brief sentiment analysis (1-2 sentences)
2. Personalized advice (3-4 sentences)
3. 3 actionable insights as bullet points
4. Risk level assessment (low/medium/high)

Format your response as JSON:
{{
  "sentiment": "brief analysis",
  "advice": "personalized advice",
  "insights": ["insight 1", "insight 2", "insight 3"],
  "riskLevel": "low/medium/high"
}}"""


class MoodAnalysisAgent(BaseAgent):
    """
    Produces the ``AIAnnotation`` stored with each mood entry.
    Never fails: an unreachable model yields the static advice table.
    """

    def __init__(self, **kwargs):
        super().__init__("MoodAnalysisAgent", MOOD_PROMPT, **kwargs)

    def build_prompt(self, entry: MoodCreate) -> str:
        return self.system_prompt.format(
            mood=entry.mood,
            intensity=entry.intensity,
            notes=entry.notes or "No notes provided",
            triggers=", ".join(entry.triggers) or "None",
            date=entry.date.isoformat(),
        )

    async def analyze_mood(self, entry: MoodCreate) -> AIAnnotation:
        """
        Annotate a mood entry.

        Returns:
            AIAnnotation whose ``source`` tells which tier produced it
        """
        try:
            text = await self.call_llm(
                [{"role": "user", "content": self.build_prompt(entry)}],
                temperature=0.7,
            )
        except (ModelUnavailable, ModelError) as e:
            self.monitor.record("mood", "fallback", str(e))
            return fallback_annotation(entry.mood, entry.intensity)

        annotation = parse_mood_response(text, entry.intensity)
        if annotation.source == "salvaged":
            self.monitor.record("mood", "salvaged", "model reply contained no JSON object")
        return annotation

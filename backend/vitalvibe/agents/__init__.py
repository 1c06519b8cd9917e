"""Agents module - AI agents for mood analysis and symptom triage."""

from .base_agent import BaseAgent
from .mood_agent import MoodAnalysisAgent
from .symptom_agent import SymptomTriageAgent, MODE_FALLBACK, MODE_MODEL

__all__ = [
    'BaseAgent',
    'MoodAnalysisAgent',
    'SymptomTriageAgent',
    'MODE_FALLBACK',
    'MODE_MODEL',
]

"""
Unit tests for the mood analysis and symptom triage agents.
"""

import random
import datetime as dt

import pytest

from fakes import FailingProvider, ScriptedProvider
from vitalvibe.agents import MODE_FALLBACK, MODE_MODEL, MoodAnalysisAgent, SymptomTriageAgent
from vitalvibe.core.fallback_monitor import FallbackMonitor, fallback_monitor
from vitalvibe.core.fallbacks import SYMPTOM_FALLBACK_RESPONSES, mood_fallback
from vitalvibe.llm.base import LLMProvider, ModelError
from vitalvibe.models import MoodCreate


def mood_entry(mood="happy", intensity=8, **kwargs):
    return MoodCreate(user_id="u1", date=dt.date(2026, 10, 1), mood=mood, intensity=intensity, **kwargs)


class GarbageProvider(LLMProvider):
    name = "garbage"

    def __init__(self):
        super().__init__(api_key="k", model="m")

    async def chat_completion(self, messages, temperature=None, max_tokens=None, **kwargs):
        raise ModelError("malformed payload")


class TestMoodAnalysisAgent:

    @pytest.mark.asyncio
    async def test_model_failure_uses_static_table(self):
        agent = MoodAnalysisAgent()
        agent.set_llm_provider(FailingProvider())

        annotation = await agent.analyze_mood(mood_entry("happy", 8))

        assert annotation.source == "fallback"
        assert annotation.risk_level == "low"
        assert annotation.sentiment == mood_fallback("happy", 8)["sentiment"]

    @pytest.mark.asyncio
    async def test_unknown_mood_falls_back_to_neutral(self):
        agent = MoodAnalysisAgent()
        agent.set_llm_provider(FailingProvider())

        annotation = await agent.analyze_mood(mood_entry("melancholic", 5))

        assert annotation.sentiment == mood_fallback("neutral", 5)["sentiment"]

    @pytest.mark.asyncio
    async def test_no_provider_configured_uses_static_table(self):
        agent = MoodAnalysisAgent()
        agent.set_llm_provider(None)

        annotation = await agent.analyze_mood(mood_entry("anxious", 9))

        assert annotation.source == "fallback"
        assert annotation.risk_level == "high"

    @pytest.mark.asyncio
    async def test_model_error_uses_static_table(self):
        agent = MoodAnalysisAgent()
        agent.set_llm_provider(GarbageProvider())

        annotation = await agent.analyze_mood(mood_entry("sad", 7))

        assert annotation.source == "fallback"
        assert annotation.risk_level == "medium"

    @pytest.mark.asyncio
    async def test_structured_reply(self):
        provider = ScriptedProvider(
            'Here you go: {"sentiment": "Upbeat.", "advice": "Enjoy it.", '
            '"insights": ["a", "b", "c"], "riskLevel": "low"}'
        )
        agent = MoodAnalysisAgent()
        agent.set_llm_provider(provider)

        annotation = await agent.analyze_mood(mood_entry("happy", 6, notes="Great day", triggers=["sun"]))

        assert annotation.source == "model"
        assert annotation.advice == "Enjoy it."
        prompt = provider.prompts[0]
        assert "- Mood: happy" in prompt
        assert "- Intensity: 6/10" in prompt
        assert "- Notes: Great day" in prompt
        assert "- Triggers: sun" in prompt
        assert '"riskLevel": "low/medium/high"' in prompt

    @pytest.mark.asyncio
    async def test_unstructured_reply_is_salvaged(self):
        agent = MoodAnalysisAgent()
        agent.set_llm_provider(ScriptedProvider("Take a walk and drink water."))

        annotation = await agent.analyze_mood(mood_entry("tired", 8))

        assert annotation.source == "salvaged"
        assert annotation.advice == "Take a walk and drink water."
        assert annotation.risk_level == "medium"

    @pytest.mark.asyncio
    async def test_fallbacks_are_counted(self):
        monitor = FallbackMonitor()
        agent = MoodAnalysisAgent(monitor=monitor)
        agent.set_llm_provider(FailingProvider())

        await agent.analyze_mood(mood_entry())
        await agent.analyze_mood(mood_entry())

        assert monitor.snapshot() == {"mood.fallback": 2}

    @pytest.mark.asyncio
    async def test_fallback_emits_structured_log(self, caplog):
        agent = MoodAnalysisAgent()
        agent.set_llm_provider(FailingProvider())

        with caplog.at_level("WARNING", logger="vitalvibe.core.fallback_monitor"):
            await agent.analyze_mood(mood_entry())

        events = [r.extra_fields for r in caplog.records if hasattr(r, "extra_fields")]
        assert {"event": "ai_fallback", "flow": "mood", "tier": "fallback",
                "reason": "connection refused"} in events
        assert fallback_monitor.snapshot()["mood.fallback"] == 1


class TestSymptomTriageAgent:

    @pytest.mark.asyncio
    async def test_failure_returns_canned_question(self):
        agent = SymptomTriageAgent(rng=random.Random(7))
        agent.set_llm_provider(FailingProvider())

        result = await agent.diagnose("I have a headache", [])

        assert result["mode"] == MODE_FALLBACK
        assert result["message"] in SYMPTOM_FALLBACK_RESPONSES

    @pytest.mark.asyncio
    async def test_model_reply_is_trimmed(self):
        agent = SymptomTriageAgent()
        agent.set_llm_provider(ScriptedProvider("  How long has it hurt?  \n"))

        result = await agent.diagnose("My knee hurts", [])

        assert result == {"message": "How long has it hurt?", "mode": MODE_MODEL}

    @pytest.mark.asyncio
    async def test_history_window_is_applied(self):
        provider = ScriptedProvider("Noted.")
        agent = SymptomTriageAgent(history_window=2)
        agent.set_llm_provider(provider)
        history = [{"role": "user", "content": f"msg {i}"} for i in range(5)]

        await agent.diagnose("new", history)

        prompt = provider.prompts[0]
        assert "Patient: msg 3" in prompt and "Patient: msg 4" in prompt
        assert "msg 2" not in prompt

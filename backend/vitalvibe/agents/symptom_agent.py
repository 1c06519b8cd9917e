"""
Symptom Triage Agent - conversational symptom consultation with session memory.
"""

import random
from typing import Dict, Any, List, Optional

from .base_agent import BaseAgent
from ..core.fallbacks import symptom_fallback
from ..core.prompt_builder import build_prompt
from ..llm.base import ModelError, ModelUnavailable

MODE_MODEL = "GEMINI_AI"
MODE_FALLBACK = "FALLBACK"

ROLE_LABELS = {"user": "Patient", "assistant": "Doctor"}

TRIAGE_PROMPT = """You are Dr. Sarah, a compassionate, experienced medical consultant.

Instructions:
- Respond naturally like a real doctor having a conversation
- Ask one or two clarifying questions at a time
- Remember the patient's previous symptoms and concerns
- Use simple, understandable language
- Never diagnose definitively, suggest "could be" or "might be"
- Always recommend seeing a doctor for persistent symptoms
- If symptoms sound serious, recommend immediate medical attention
- Be warm, empathetic, and professional
- No markdown, no asterisks, no special formatting
- Just natural conversation
{context}
Patient says: "{entry}"

Respond naturally as Dr. Sarah would in a real consultation."""


class SymptomTriageAgent(BaseAgent):
    """
    Answers one patient turn using the recent session history.
    On model failure answers with a canned clarifying question.
    """

    def __init__(self, history_window: int = 8, rng: Optional[random.Random] = None, **kwargs):
        """
        Args:
            history_window: Number of prior turns rendered into the prompt
            rng: Random source for picking fallback replies
        """
        super().__init__("SymptomTriageAgent", TRIAGE_PROMPT, **kwargs)
        self.history_window = history_window
        self.rng = rng

    def build_prompt(self, message: str, history: List[Dict[str, Any]]) -> str:
        return build_prompt(
            self.system_prompt, history, message,
            k=self.history_window, role_labels=ROLE_LABELS,
        )

    async def diagnose(self, message: str, history: List[Dict[str, Any]]) -> Dict[str, str]:
        """
        Reply to a patient message.

        Returns:
            ``{"message": ..., "mode": "GEMINI_AI" | "FALLBACK"}``
        """
        try:
            text = await self.call_llm(
                [{"role": "user", "content": self.build_prompt(message, history)}],
                temperature=0.7,
            )
        except (ModelUnavailable, ModelError) as e:
            self.monitor.record("symptom", "fallback", str(e))
            return {"message": symptom_fallback(self.rng), "mode": MODE_FALLBACK}

        reply = text.strip()
        if not reply:
            self.monitor.record("symptom", "fallback", "model reply was blank")
            return {"message": symptom_fallback(self.rng), "mode": MODE_FALLBACK}
        return {"message": reply, "mode": MODE_MODEL}

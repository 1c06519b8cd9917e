"""
Agent base - shared model access for the annotation agents.
"""

import logging
import time
from typing import Dict, Optional, List

from ..core.fallback_monitor import FallbackMonitor, fallback_monitor
from ..llm.base import LLMProvider, LLMMessage, ModelUnavailable

logger = logging.getLogger(__name__)


class BaseAgent:
    """
    An agent owns a prompt template and turns one entry into model output.
    Subclasses decide how failures degrade; ``call_llm`` only reports them.
    """

    def __init__(self, name: str, system_prompt: str,
                 monitor: Optional[FallbackMonitor] = None):
        """
        Args:
            name: Short flow name used in logs ("mood", "symptom")
            system_prompt: Persona and instruction template
            monitor: Fallback counters; the process-wide monitor by default
        """
        self.name = name
        self.system_prompt = system_prompt
        self.monitor = monitor or fallback_monitor
        self._llm_provider: Optional[LLMProvider] = None

    def set_llm_provider(self, provider: Optional[LLMProvider]) -> None:
        """Attach the provider; None means no key is configured."""
        self._llm_provider = provider

    async def call_llm(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
    ) -> str:
        """
        Send ``messages`` to the provider once, without retry.

        Returns:
            The reply text

        Raises:
            ModelUnavailable: no provider configured, or the provider could not be reached
            ModelError: the provider answered with something unusable
        """
        if self._llm_provider is None:
            raise ModelUnavailable(
                f"LLM not configured for {self.name}; set LLM_API_KEY or GEMINI_API_KEY"
            )

        prompt = [LLMMessage.text(msg["role"], msg["content"]) for msg in messages]
        logger.debug(f"{self.name} agent sending {len(prompt)} message(s) at temperature {temperature}")

        started = time.time()
        try:
            reply = await self._llm_provider.chat_completion(prompt, temperature=temperature)
        except Exception as e:
            logger.error(
                f"{self.name} agent model call failed: {e}",
                extra={"extra_fields": {
                    "agent": self.name,
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.time() - started) * 1000, 2),
                }}
            )
            raise

        logger.debug(f"{self.name} agent got {len(reply.content)} chars back")
        return reply.content

"""
LLM Provider Base - Abstract base for hosted language-model providers.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field

import httpx


class ModelUnavailable(Exception):
    """The model could not be reached: network failure, timeout, quota or outage."""


class ModelError(Exception):
    """The model answered, but not with something usable."""


@dataclass
class LLMMessage:
    """A single conversation message."""
    role: str  # "system", "user", "assistant"
    content: str

    @staticmethod
    def text(role: str, text: str) -> "LLMMessage":
        """Create a text message."""
        return LLMMessage(role=role, content=text)


@dataclass
class LLMResponse:
    """Response from an LLM API call."""
    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    Abstract base class for LLM API providers.

    Implementations perform exactly one HTTP call per request and never
    retry; failures surface as ``ModelUnavailable`` or ``ModelError``.
    """

    name = "base"

    def __init__(self, api_key: str, model: str, base_url: Optional[str] = None,
                 default_temperature: float = 0.7, default_max_tokens: int = 2048,
                 timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens
        self.timeout = timeout

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: Conversation messages, system prompt first if any
            temperature: Sampling temperature override
            max_tokens: Max tokens override
            **kwargs: Additional provider-specific parameters

        Returns:
            LLMResponse with the generated content

        Raises:
            ModelUnavailable: transport failure, timeout, HTTP 429 or 5xx
            ModelError: other HTTP errors or a malformed/empty payload
        """

    def _format_messages(self, messages: List[LLMMessage]) -> List[Dict[str, Any]]:
        """Convert LLMMessage list to OpenAI-style dicts."""
        return [{"role": m.role, "content": m.content} for m in messages]

    async def _post_json(self, url: str, payload: Dict[str, Any],
                         headers: Dict[str, str]) -> Dict[str, Any]:
        """POST ``payload`` and return the decoded body, classifying failures."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise ModelUnavailable(f"{self.name} request timed out after {self.timeout}s") from e
        except httpx.TransportError as e:
            raise ModelUnavailable(f"{self.name} transport error: {e}") from e

        if resp.status_code == 429 or resp.status_code >= 500:
            raise ModelUnavailable(f"{self.name} returned HTTP {resp.status_code}")
        if resp.status_code >= 400:
            raise ModelError(f"{self.name} returned HTTP {resp.status_code}: {resp.text[:300]}")

        try:
            data = resp.json()
        except ValueError as e:
            raise ModelError(f"{self.name} returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise ModelError(f"{self.name} returned an unexpected payload")
        return data

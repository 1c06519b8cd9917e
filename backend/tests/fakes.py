"""
Test doubles for LLM providers and their HTTP transport.
"""

from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock, patch

from vitalvibe.llm.base import LLMMessage, LLMProvider, LLMResponse, ModelUnavailable


class FailingProvider(LLMProvider):
    """Provider whose every call fails as if the network were down."""

    name = "failing"

    def __init__(self):
        super().__init__(api_key="test", model="test-model")
        self.calls = 0

    async def chat_completion(self, messages: List[LLMMessage], temperature: Optional[float] = None,
                              max_tokens: Optional[int] = None, **kwargs) -> LLMResponse:
        self.calls += 1
        raise ModelUnavailable("connection refused")


class ScriptedProvider(LLMProvider):
    """Provider that answers with a fixed text and remembers the prompts it saw."""

    name = "scripted"

    def __init__(self, reply: str):
        super().__init__(api_key="test", model="test-model")
        self.reply = reply
        self.prompts: List[str] = []

    async def chat_completion(self, messages: List[LLMMessage], temperature: Optional[float] = None,
                              max_tokens: Optional[int] = None, **kwargs) -> LLMResponse:
        self.prompts.append(messages[-1].content)
        return LLMResponse(content=self.reply, model=self.model)


def mock_http(response=None, side_effect=None):
    """Patch httpx.AsyncClient so post() returns ``response`` or raises ``side_effect``."""
    patcher = patch("httpx.AsyncClient")
    mock_client = patcher.start()
    mock_instance = AsyncMock()
    if side_effect is not None:
        mock_instance.post.side_effect = side_effect
    else:
        mock_instance.post.return_value = response
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_client.return_value = mock_instance
    return patcher, mock_instance


def json_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response

"""
Unit tests for the LLM module.
Tests LLMMessage, LLMResponse, providers, and factory.
"""

import pytest
import httpx

from fakes import json_response, mock_http
from vitalvibe.config import Settings
from vitalvibe.llm.base import LLMMessage, LLMResponse, ModelError, ModelUnavailable
from vitalvibe.llm.gemini_provider import GeminiProvider
from vitalvibe.llm.openai_provider import OpenAIProvider
from vitalvibe.llm.factory import create_llm_provider, provider_from_settings


class TestLLMMessage:
    """Tests for LLMMessage dataclass."""

    def test_text_message(self):
        msg = LLMMessage.text("user", "Hello")
        assert msg.role == "user"
        assert msg.content == "Hello"


class TestLLMResponse:
    """Tests for LLMResponse dataclass."""

    def test_basic_response(self):
        resp = LLMResponse(content="Hello!", model="gemini-2.5-flash")
        assert resp.content == "Hello!"
        assert resp.usage == {}
        assert resp.raw is None


class TestOpenAIProvider:
    """Tests for OpenAI-compatible provider."""

    def test_init_defaults(self):
        provider = OpenAIProvider(api_key="test-key")
        assert provider.model == "gpt-4o-mini"
        assert provider.base_url == "https://api.openai.com/v1"
        assert provider.timeout == 30.0

    def test_format_messages(self):
        provider = OpenAIProvider(api_key="test")
        formatted = provider._format_messages([
            LLMMessage.text("system", "sys prompt"),
            LLMMessage.text("user", "hello"),
        ])
        assert formatted == [
            {"role": "system", "content": "sys prompt"},
            {"role": "user", "content": "hello"},
        ]

    def test_headers(self):
        headers = OpenAIProvider(api_key="sk-test123")._get_headers()
        assert headers["Authorization"] == "Bearer sk-test123"

    @pytest.mark.asyncio
    async def test_chat_completion_success(self):
        provider = OpenAIProvider(api_key="test-key")
        patcher, mock_instance = mock_http(json_response({
            "choices": [{"message": {"content": "Test response"}}],
            "model": "gpt-4o-mini",
            "usage": {"prompt_tokens": 10, "completion_tokens": 5},
        }))
        try:
            result = await provider.chat_completion([LLMMessage.text("user", "Hello")])
        finally:
            patcher.stop()

        assert result.content == "Test response"
        assert result.usage["prompt_tokens"] == 10
        url = mock_instance.post.call_args[0][0]
        assert url == "https://api.openai.com/v1/chat/completions"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [429, 500, 503])
    async def test_rate_limit_and_server_errors_are_unavailable(self, status_code):
        provider = OpenAIProvider(api_key="test-key")
        patcher, _ = mock_http(json_response({"error": "x"}, status_code=status_code))
        try:
            with pytest.raises(ModelUnavailable):
                await provider.chat_completion([LLMMessage.text("user", "Hello")])
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_client_error_is_model_error(self):
        provider = OpenAIProvider(api_key="bad-key")
        patcher, _ = mock_http(json_response({"error": "invalid key"}, status_code=401))
        try:
            with pytest.raises(ModelError):
                await provider.chat_completion([LLMMessage.text("user", "Hello")])
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, 42, ["part"], {"text": "hi"}, "   "])
    async def test_non_text_content_is_model_error(self, content):
        provider = OpenAIProvider(api_key="test-key")
        patcher, _ = mock_http(json_response({"choices": [{"message": {"content": content}}]}))
        try:
            with pytest.raises(ModelError):
                await provider.chat_completion([LLMMessage.text("user", "Hello")])
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        provider = OpenAIProvider(api_key="test-key", timeout=1.0)
        patcher, _ = mock_http(side_effect=httpx.ReadTimeout("timed out"))
        try:
            with pytest.raises(ModelUnavailable, match="timed out"):
                await provider.chat_completion([LLMMessage.text("user", "Hello")])
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_missing_choices_is_model_error(self):
        provider = OpenAIProvider(api_key="test-key")
        patcher, _ = mock_http(json_response({"choices": []}))
        try:
            with pytest.raises(ModelError):
                await provider.chat_completion([LLMMessage.text("user", "Hello")])
        finally:
            patcher.stop()


class TestGeminiProvider:
    """Tests for the Gemini generateContent provider."""

    def test_init_defaults(self):
        provider = GeminiProvider(api_key="g-key")
        assert provider.model == "gemini-2.5-flash"
        assert provider._get_headers()["x-goog-api-key"] == "g-key"

    def test_payload_maps_roles(self):
        provider = GeminiProvider(api_key="g-key")
        payload = provider._build_payload([
            LLMMessage.text("system", "be kind"),
            LLMMessage.text("user", "hi"),
            LLMMessage.text("assistant", "hello"),
        ], temperature=0.2, max_tokens=100)

        assert payload["system_instruction"] == {"parts": [{"text": "be kind"}]}
        assert [c["role"] for c in payload["contents"]] == ["user", "model"]
        assert payload["generationConfig"]["maxOutputTokens"] == 100

    @pytest.mark.asyncio
    async def test_chat_completion_success(self):
        provider = GeminiProvider(api_key="g-key")
        patcher, mock_instance = mock_http(json_response({
            "candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "there"}]}}],
            "usageMetadata": {"promptTokenCount": 3, "candidatesTokenCount": 2, "totalTokenCount": 5},
            "modelVersion": "gemini-2.5-flash",
        }))
        try:
            result = await provider.chat_completion([LLMMessage.text("user", "Hi")])
        finally:
            patcher.stop()

        assert result.content == "Hello there"
        assert result.usage["total_tokens"] == 5
        url = mock_instance.post.call_args[0][0]
        assert url.endswith("/models/gemini-2.5-flash:generateContent")

    @pytest.mark.asyncio
    async def test_blocked_prompt_is_model_error(self):
        provider = GeminiProvider(api_key="g-key")
        patcher, _ = mock_http(json_response({"promptFeedback": {"blockReason": "SAFETY"}}))
        try:
            with pytest.raises(ModelError, match="SAFETY"):
                await provider.chat_completion([LLMMessage.text("user", "Hi")])
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"candidates": ["oops"]},
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        {"candidates": [{"content": {"parts": ["bare string", 7]}}]},
        {"candidates": [{"content": {"parts": 42}}]},
        {"candidates": [{"content": "text"}]},
    ])
    async def test_malformed_payload_is_model_error(self, payload):
        provider = GeminiProvider(api_key="g-key")
        patcher, _ = mock_http(json_response(payload))
        try:
            with pytest.raises(ModelError):
                await provider.chat_completion([LLMMessage.text("user", "Hi")])
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_null_parts_are_skipped(self):
        provider = GeminiProvider(api_key="g-key")
        patcher, _ = mock_http(json_response({
            "candidates": [{"content": {"parts": [{"text": None}, {"text": "ok"}]}}],
            "usageMetadata": None,
        }))
        try:
            result = await provider.chat_completion([LLMMessage.text("user", "Hi")])
        finally:
            patcher.stop()

        assert result.content == "ok"
        assert result.usage["total_tokens"] == 0

    @pytest.mark.asyncio
    async def test_connection_error_is_unavailable(self):
        provider = GeminiProvider(api_key="g-key")
        patcher, _ = mock_http(side_effect=httpx.ConnectError("refused"))
        try:
            with pytest.raises(ModelUnavailable):
                await provider.chat_completion([LLMMessage.text("user", "Hi")])
        finally:
            patcher.stop()


class TestLLMFactory:
    """Tests for LLM provider factory."""

    def test_default_is_gemini(self):
        assert isinstance(create_llm_provider(api_key="key"), GeminiProvider)

    def test_create_openai_provider(self):
        provider = create_llm_provider(provider="openai", api_key="test-key", model="gpt-4o")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_no_api_key_returns_none(self):
        assert create_llm_provider(provider="gemini", api_key="") is None

    def test_unsupported_provider_raises(self):
        with pytest.raises(ValueError, match="Unsupported"):
            create_llm_provider(provider="unsupported", api_key="key")

    def test_from_settings_uses_legacy_key_and_timeout(self):
        config = Settings(llm_api_key=None, gemini_api_key="legacy", llm_timeout_seconds=12)
        provider = provider_from_settings(config)
        assert isinstance(provider, GeminiProvider)
        assert provider.api_key == "legacy"
        assert provider.timeout == 12

"""LLM module - provides unified interface for LLM API providers."""

from .base import LLMProvider, LLMMessage, LLMResponse, ModelUnavailable, ModelError
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider
from .factory import create_llm_provider, provider_from_settings

__all__ = [
    'LLMProvider',
    'LLMMessage',
    'LLMResponse',
    'ModelUnavailable',
    'ModelError',
    'GeminiProvider',
    'OpenAIProvider',
    'create_llm_provider',
    'provider_from_settings',
]

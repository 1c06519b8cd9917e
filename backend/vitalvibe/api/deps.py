"""
Request dependencies.

The store and the LLM provider are created by the application lifespan
and live on ``app.state``; routes get them only through these functions,
which tests replace via ``app.dependency_overrides``.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Request

from ..agents import MoodAnalysisAgent, SymptomTriageAgent
from ..config import Settings, settings
from ..core.conversation import ConversationManager
from ..core.errors import AppError, ErrorKind
from ..llm.base import LLMProvider
from ..storage import DocumentStore, UserStorage


def get_settings() -> Settings:
    return settings


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None or not store.is_ready():
        raise AppError(ErrorKind.UNAVAILABLE, "Database unavailable")
    return store


def get_llm_provider(request: Request) -> Optional[LLMProvider]:
    return getattr(request.app.state, "llm_provider", None)


def get_user_storage(store: DocumentStore = Depends(get_store)) -> UserStorage:
    return UserStorage(store)


def get_conversations(
    store: DocumentStore = Depends(get_store),
    config: Settings = Depends(get_settings),
) -> ConversationManager:
    return ConversationManager(store, demo_user_id=config.demo_user_id)


def get_mood_agent(provider: Optional[LLMProvider] = Depends(get_llm_provider)) -> MoodAnalysisAgent:
    agent = MoodAnalysisAgent()
    agent.set_llm_provider(provider)
    return agent


def get_symptom_agent(
    provider: Optional[LLMProvider] = Depends(get_llm_provider),
    config: Settings = Depends(get_settings),
) -> SymptomTriageAgent:
    agent = SymptomTriageAgent(history_window=config.history_window)
    agent.set_llm_provider(provider)
    return agent


def success(data: Any = None, **extra: Any) -> Dict[str, Any]:
    """Success envelope: ``{"success": true, "data": ..., **extra}``."""
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body

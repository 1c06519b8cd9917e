"""
Shared test fixtures and configuration.
"""

import asyncio
import os

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/vitalvibe_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LLM_API_KEY", "")
os.environ.setdefault("GEMINI_API_KEY", "")

from fastapi.testclient import TestClient

from fakes import FailingProvider
from vitalvibe.api.deps import get_llm_provider, get_store
from vitalvibe.core.fallback_monitor import fallback_monitor
from vitalvibe.main import app
from vitalvibe.storage import LocalStorage


@pytest.fixture(autouse=True)
def reset_fallback_counters():
    fallback_monitor.reset()
    yield
    fallback_monitor.reset()


@pytest.fixture
def store(tmp_path):
    storage = LocalStorage(str(tmp_path / "data"))
    asyncio.run(storage.connect())
    return storage


@pytest.fixture
def llm_provider():
    """Provider used by the app under test; failing unless a test overrides it."""
    return FailingProvider()


@pytest.fixture
def client(store, llm_provider):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_llm_provider] = lambda: llm_provider
    app.state.store = store
    yield TestClient(app)
    app.dependency_overrides.clear()
    del app.state.store

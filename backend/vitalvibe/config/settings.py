"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "VitalVibe"
    app_version: str = "1.0.0"
    debug: bool = True

    # Storage
    local_storage_path: str = "./data"

    # Entries posted without an owner (chat logs from the demo UI) land here
    demo_user_id: str = "demo-user"

    # LLM Provider settings
    llm_provider: str = "gemini"  # "gemini" or "openai"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # uses provider default if not set
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_timeout_seconds: float = 30.0

    # Older deployments set the key under this name
    gemini_api_key: Optional[str] = None

    # AI annotation flow
    history_window: int = 8  # most recent turns rendered into a prompt

    # Range checks on entry creation: "off", "warn" or "enforce"
    validation_policy: Literal["off", "warn", "enforce"] = "enforce"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/vitalvibe.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses
    log_llm_calls: bool = True  # Per-call duration and token usage from providers

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()

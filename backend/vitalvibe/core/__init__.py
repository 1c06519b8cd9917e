"""Core module - AI annotation flow, aggregation and shared business logic."""

from .conversation import ConversationManager
from .errors import AppError, ErrorKind
from .fallback_monitor import FallbackMonitor, fallback_monitor
from .prompt_builder import build_prompt, render_history
from .response_parser import fallback_annotation, parse_mood_response
from .trends import analyze_trends

__all__ = [
    'ConversationManager',
    'AppError',
    'ErrorKind',
    'FallbackMonitor',
    'fallback_monitor',
    'build_prompt',
    'render_history',
    'fallback_annotation',
    'parse_mood_response',
    'analyze_trends',
]

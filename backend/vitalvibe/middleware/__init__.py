"""Middleware module."""

from .error_handler import register_exception_handlers
from .logging_middleware import RequestLoggingMiddleware

__all__ = ['register_exception_handlers', 'RequestLoggingMiddleware']

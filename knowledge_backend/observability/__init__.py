"""
Observability module.

Provides logging configuration and helpers for structured log context.
"""

from knowledge_backend.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from knowledge_backend.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
    "safe_log_value",
]

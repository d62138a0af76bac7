"""Utility modules for dpa guard."""

from .logging import SanitizingFilter, configure_logging, redact_message

__all__ = [
    "SanitizingFilter",
    "configure_logging",
    "redact_message",
]

"""Logging setup with credential redaction.

Access tokens, API keys and bearer headers must never reach log output.
The filter rewrites records before any handler formats them.
"""

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(?P<key>access_token|apikey|api_key|refresh_token)(?P<sep>\s*[=:]\s*)(?P<value>\"[^\"]*\"|'[^']*'|[^\s&#,]+)",
    re.IGNORECASE,
)
_BEARER_PATTERN = re.compile(r"(?P<key>Bearer\s+)[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)

REDACTED = "[REDACTED]"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def redact_message(message: str) -> str:
    """Replace credential values in a log message with a redaction marker.

    Args:
        message: Raw log message string.

    Returns:
        Message with token, key and bearer values replaced by ``[REDACTED]``.
    """
    message = _SENSITIVE_PATTERN.sub(
        lambda m: f"{m.group('key')}{m.group('sep')}{REDACTED}", message
    )
    return _BEARER_PATTERN.sub(lambda m: f"{m.group('key')}{REDACTED}", message)


class SanitizingFilter(logging.Filter):
    """A :class:`logging.Filter` that strips credentials from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_message(record.getMessage())
        record.args = None
        return True


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Configure the ``dpa_guard`` logger hierarchy.

    Installs one stream handler carrying a :class:`SanitizingFilter`. Safe to
    call more than once; the handler is only added the first time.

    Args:
        level: Log level name or number.

    Returns:
        The package logger.
    """
    logger = logging.getLogger("dpa_guard")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(getattr(h, "_dpa_guard", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(SanitizingFilter())
        handler._dpa_guard = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger

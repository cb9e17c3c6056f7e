"""Logging setup with secret redaction."""

from __future__ import annotations

import logging
import re
import sys

LOGGER_NAME = "ai-tool-recommender"

_SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(Bearer\s+)\S+", re.IGNORECASE), r"\1[REDACTED]"),
    # OpenAI / OpenRouter style keys: sk-..., sk-or-v1-...
    (re.compile(r"\bsk-[A-Za-z0-9_-]{10,}\b"), "[REDACTED_API_KEY]"),
    (
        re.compile(r"(api[_-]?key\s*[=:]\s*)['\"]?\S+['\"]?", re.IGNORECASE),
        r"\1[REDACTED]",
    ),
]


class SecretRedactingFilter(logging.Filter):
    """Logging filter that redacts API keys and bearer tokens."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = message
        for pattern, replacement in _SECRET_PATTERNS:
            redacted = pattern.sub(replacement, redacted)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


secret_filter = SecretRedactingFilter()


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a secret for logging, keeping only its first characters."""
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return value[:keep_chars] + "*" * (len(value) - keep_chars)


def setup_logging(level: str = "WARNING", verbose: bool = False) -> logging.Logger:
    """Configure the package logger to write redacted records to stderr.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
        verbose: Force DEBUG level

    Returns:
        The package logger.

    Raises:
        ValueError: If the level name is unknown.
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, level.upper(), None)
        if not isinstance(log_level, int):
            raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)-8s] %(name)s - %(message)s")
    )
    handler.addFilter(secret_filter)
    logger.addHandler(handler)
    logger.setLevel(log_level)

    if log_level > logging.DEBUG:
        for name in ("urllib3", "requests"):
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger

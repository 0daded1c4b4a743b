"""
Centralized logging configuration for the shortlink service.

Sets up structured logging with:
- JSON formatting for production, pretty console for development
- IP hashing in production log lines
- Redaction of sensitive keys
- Sampling rates for high-frequency events (redirects, analytics polling)

``setup_logging()`` is called once by the application factory; modules only
ever call ``get_logger(__name__)``.
"""

from __future__ import annotations

import hashlib
import logging
import random
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor

if TYPE_CHECKING:
    from config import LoggingSettings

# Sampling rates for high-frequency events, overwritten by setup_logging()
SAMPLING_RATES: dict[str, float] = {
    "url_redirect": 0.05,
    "analytics_query": 0.20,
}

# Sensitive fields to redact from logs
REDACTED_FIELDS = {
    "password",
    "token",
    "api_key",
    "authorization",
    "cookie",
    "secret",
}

_PROTECTED_KEYS = ("level", "event", "timestamp", "logger")

_hash_ips = False


def add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO format UTC timestamp to event dict."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact sensitive fields from logs."""
    for key in list(event_dict.keys()):
        if key in _PROTECTED_KEYS:
            continue
        lowered = key.lower()
        if lowered in REDACTED_FIELDS or any(
            sensitive in lowered for sensitive in ("password", "token", "secret")
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def configure_structlog(log_format: str = "console") -> None:
    """
    Configure structlog with appropriate processors for the environment.

    json:    one JSON object per line, for log shipping
    console: coloured, human readable output for development
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            pad_event=15,
            sort_keys=False,
        )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging(log_level: str = "INFO") -> None:
    """Route standard library logging to stdout at the configured level."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    # Reduce noise from the server and client libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def setup_logging(
    settings: Optional["LoggingSettings"] = None, *, production: bool = False
) -> None:
    """
    Initialize the logging system for the application.

    Called once from ``create_app()``. Without settings, development defaults
    are used.
    """
    global _hash_ips

    log_level = settings.log_level if settings else "INFO"
    log_format = settings.log_format if settings else "console"
    if settings is not None:
        SAMPLING_RATES["url_redirect"] = settings.sample_rate_redirect
        SAMPLING_RATES["analytics_query"] = settings.sample_rate_analytics
    _hash_ips = production

    configure_stdlib_logging(log_level)
    configure_structlog(log_format)

    get_logger(__name__).info(
        "logging_initialized",
        log_level=log_level,
        log_format=log_format,
        production=production,
    )


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("link_created", slug="abc123", link_id=1)
    """
    return structlog.get_logger(name)


def should_sample(event_type: str) -> bool:
    """
    Determine if an event should be logged based on its sampling rate.

    Event types without a configured rate are always logged.
    """
    sample_rate = SAMPLING_RATES.get(event_type, 1.0)

    if sample_rate >= 1.0:
        return True
    if sample_rate <= 0.0:
        return False
    return random.random() < sample_rate


def hash_ip(ip_address: Optional[str]) -> Optional[str]:
    """
    Hash an IP address for log output.

    In production returns the first 16 hex chars of its SHA-256; in
    development returns the address unchanged for easier debugging.
    """
    if not ip_address:
        return ip_address
    if _hash_ips:
        return hashlib.sha256(ip_address.encode()).hexdigest()[:16]
    return ip_address

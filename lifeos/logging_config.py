"""
Tool: Logging Configuration
Purpose: structlog on top of stdlib logging for the Life OS command line

Console output by default, JSON lines with LIFEOS_LOG_FORMAT=json. Every
record carries the session context bound by bind_session() (user,
store backend, AI model), and Gemini API keys are masked before any
renderer sees them: the key travels in the request URL, and httpx
includes that URL in its own log lines.

Usage:
    from lifeos.logging_config import bind_session, setup_logging
    setup_logging()
    bind_session(config)
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from lifeos.config_models import LifeOSConfig


API_KEY_PATTERN = re.compile(r"([?&]key=)[^&\s\"']+")


def redact_api_key(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask ``key=...`` query parameters in the event text."""
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = API_KEY_PATTERN.sub(r"\1***", event)
    return event_dict


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    if level is None:
        level = os.environ.get("LIFEOS_LOG_LEVEL", "INFO")

    if json_output is None:
        json_output = os.environ.get("LIFEOS_LOG_FORMAT", "").lower() == "json"

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_api_key,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    # Request lines are noise at INFO; failures are logged by the completion client
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))


def bind_session(config: LifeOSConfig) -> dict[str, str]:
    """Attach the user, store backend and AI model to every later log record."""
    context = {
        "user_id": config.store.user_id,
        "backend": config.store.backend,
        "model": config.ai.model,
    }
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)
    return context


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


__all__ = ["bind_session", "get_logger", "redact_api_key", "setup_logging"]

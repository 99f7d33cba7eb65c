"""
Structured logging configuration using structlog.

structlog events and stdlib records (uvicorn, aiosqlite) go through the same
processor chain and handler, so a deployment sees one format. Request
middleware binds ``request_id`` and ``user_id`` as contextvars; they are
merged into every event logged while the request is handled.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from shuttlestock.config.settings import Settings, get_settings

QUIET_LOGGERS = ("aiosqlite", "uvicorn.access", "httpx", "httpcore")


def _app_context_processor(settings: Settings) -> Processor:
    """Stamp every event with the service name and version."""

    def add_app_context(
        logger: logging.Logger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", settings.app_name)
        event_dict.setdefault("version", settings.app_version)
        return event_dict

    return add_app_context


def use_json(settings: Settings) -> bool:
    """``auto`` renders for a terminal only in development."""
    if settings.log_format == "auto":
        return settings.environment != "development"
    return settings.log_format == "json"


def build_renderer(settings: Settings) -> Processor:
    if use_json(settings):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and route the stdlib root logger through it."""
    settings = settings or get_settings()

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _app_context_processor(settings),
    ]

    structlog.configure(
        processors=pre_chain
        + [
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    final: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if use_json(settings):
        final.append(structlog.processors.format_exc_info)
    final.append(build_renderer(settings))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processors=final)
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, optionally pre-bound with ``initial_values``."""
    return structlog.get_logger(name, **initial_values)

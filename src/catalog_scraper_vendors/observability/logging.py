"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from catalog_scraper_core.config.settings import Settings

_SECRET_KEYS = frozenset({"password", "passwd", "credentials"})
_REDACTED = "**********"

# Chatty while Playwright drives the browser over asyncio subprocess pipes
_QUIET_LOGGERS = ("asyncio", "playwright")

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def redact_secrets(
    _logger: object, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask values logged under credential-looking keys."""
    for key in _SECRET_KEYS.intersection(event_dict):
        event_dict[key] = _REDACTED
    return event_dict


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        merge_contextvars,
        redact_secrets,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _install_root_handler(formatter: logging.Formatter, level: int) -> None:
    """Replace root handlers with a single stream handler at ``level``."""
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib logging through one JSON or console renderer.

    Credential values are masked before rendering.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(settings.log_format),
        ],
        foreign_pre_chain=pre_chain,
    )
    _install_root_handler(formatter, _resolve_level(settings.log_level))


def bind_vendor_context(vendor: str) -> None:
    """Tag subsequent log entries with the vendor being scraped."""
    bind_contextvars(vendor=vendor)


def clear_vendor_context() -> None:
    clear_contextvars()


def _resolve_level(level_name: str) -> int:
    """Level name to logging constant, INFO for unknown names."""
    return _LEVELS.get(level_name.upper(), logging.INFO)

"""Structlog loggers for strictdto, configured from EngineSettings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog

from strictdto.core.settings import EngineSettings, get_settings

if TYPE_CHECKING:
    from structlog.typing import EventDict

_ROOT_LOGGER_NAME = "strictdto"


def _rename_event_key(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Normalize structlog payload keys.

    Args:
        logger: The logger instance (unused).
        method_name: The logging method name (unused).
        event_dict: The original event dictionary.

    Returns:
        The modified event dictionary with "message" key instead of "event".
    """
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def build_processors(settings: EngineSettings) -> list[Any]:
    """Processor chain for strictdto loggers; the renderer follows `log_json`."""
    renderer: Any = structlog.processors.JSONRenderer()
    if not settings.log_json:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        _rename_event_key,
        structlog.processors.format_exc_info,
        renderer,
    ]


def get_logger(name: str = "", *, settings: EngineSettings | None = None) -> Any:
    """Return a strictdto logger.

    The stdlib logger `strictdto.<name>` is wrapped directly so the host
    application's global structlog configuration is left untouched.
    """
    config = settings or get_settings()
    log_level = getattr(logging, config.log_level.upper(), logging.WARNING)
    stdlib_name = f"{_ROOT_LOGGER_NAME}.{name}" if name else _ROOT_LOGGER_NAME

    return structlog.wrap_logger(
        logging.getLogger(stdlib_name),
        processors=build_processors(config),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
    )

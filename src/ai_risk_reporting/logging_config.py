"""Structured logging setup (structlog over the stdlib logging module).

Two output modes:
    production   one JSON object per line, exceptions rendered inline
    otherwise    colored key=value console lines

structlog loggers and plain `logging` loggers (validators, httpx) share one
processor chain, so every line carries `app`, `level`, `logger` and an ISO
`timestamp`. Orchestrator runs bind `stage` and `run_id` as contextvars,
which `merge_contextvars` adds to everything logged during the run.
"""

import logging
import sys
from enum import Enum

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_NAME = "ai-risk-reporting"

# Third-party loggers that are too chatty below WARNING
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the application name."""
    event_dict["app"] = APP_NAME
    return event_dict


def render_enum_values(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Log enum members (stage ids, tiers, severities) by their value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def _pre_chain(json_output: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        render_enum_values,
    ]
    if json_output:
        chain.append(structlog.processors.format_exc_info)
    return chain


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Install the structlog configuration and a single root handler on stdout.

    Args:
        log_level: Level name; unknown names fall back to INFO
        environment: "production" selects JSON output, anything else the console renderer
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    json_output = environment.lower() == "production"
    pre_chain = _pre_chain(json_output)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=True)
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if json_output else "console",
    )

"""Structured logging for plumb.

structlog events and plain stdlib ``logging`` records share one handler on
stderr, rendered as JSON or as console text. stdout is left to command
results (hashes, payloads) so they can be piped.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog and stdlib logging to stderr at the given level.

    Safe to call repeatedly; each call replaces the root handler.
    """
    # Run on both structlog events and foreign stdlib records
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    final_processors: list[Any] = [ProcessorFormatter.remove_processors_meta]
    if json_output:
        final_processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final_processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Off so tests and the CLI can reconfigure between runs
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for a module (pass ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger

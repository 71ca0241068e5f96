# core/logger.py

"""
Event logging for the dashboard core.

Mutations, storage and export emit named events (`mutation_rejected`, `state_saved`,
`report_exported`, ...) with key-value context. The CLI calls `setup_logging()` once at startup;
modules only ever ask for a logger through `get_logger()`.
"""

import logging
import sys

import structlog

PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """
    Configures structlog for the current process.

    Args:
        json_output (bool): Render one JSON object per event instead of a plain console line.
        log_level (str): The minimum level name to emit; unknown names fall back to INFO.

    Notes:
        - Events go to stderr, so report output printed on stdout stays clean.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[*PROCESSORS, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)

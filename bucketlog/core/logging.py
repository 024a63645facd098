"""Structured logging — structlog events routed through stdlib logging.

Library modules get their loggers from :func:`get_logger`. Events go to the
stdlib ``bucketlog.*`` loggers, so nothing below WARNING is emitted until the
application configures logging, and nothing is ever written to stdout, which
carries the echoed log lines.
"""

from __future__ import annotations

import logging
import logging.config
import os

import structlog


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger backed by the stdlib logger *name*."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Attach a structlog-rendering stderr handler to the ``bucketlog`` logger.

    Arguments override the environment variables:
        BUCKETLOG_LOG_LEVEL  — diagnostics log level (default: INFO)
        BUCKETLOG_LOG_FORMAT — console | json (default: console)

    The root logger is left alone; the host application owns it.
    """
    log_level = (level or os.environ.get("BUCKETLOG_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.environ.get("BUCKETLOG_LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "bucketlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "bucketlog": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "bucketlog",
                },
            },
            "loggers": {
                "bucketlog": {
                    "handlers": ["bucketlog"],
                    "level": log_level,
                    "propagate": False,
                },
                "botocore": {"level": "WARNING"},
                "boto3": {"level": "WARNING"},
                "urllib3": {"level": "WARNING"},
            },
        }
    )

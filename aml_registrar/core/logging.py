"""Logging configuration using structlog."""

import logging
import sys
from typing import TextIO

import structlog

from aml_registrar.core.config import get_settings


def setup_logging(stream: TextIO | None = None) -> None:
    """Configure structlog for hosts embedding the registrar.

    Logs go to stdout unless another stream is given; the CLI passes stderr
    so its own output stays parseable.
    """
    settings = get_settings()

    log_level = settings.app.log_level.value
    stream = stream or sys.stdout

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, log_level),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if settings.observability.log_record_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=settings.observability.service_name)

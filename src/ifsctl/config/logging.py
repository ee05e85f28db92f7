"""Log output for the ifsctl CLI.

ifsctl code logs through stdlib ``logging`` under the ``ifsctl`` namespace
(and structlog for span events); both are rendered by one structlog
``ProcessorFormatter`` on stderr.  Only the ``ifsctl`` logger is configured.
It stops propagating, and the root logger and library loggers such as
numpy's keep Python's defaults.

Human mode prints compact console lines without timestamps.  ``--log-json``
prints one JSON object per line with a UTC timestamp and rendered
tracebacks.  Every line carries the running subcommand once
:func:`bind_command` has been called.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "ifsctl"


def _shared_processors(log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_json:
        processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ]
    return processors


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install the ifsctl log handler, replacing one from an earlier call.

    Args:
        verbose: Emit DEBUG records (span timings, file writes).  Otherwise
            only warnings such as instance-cap truncation get through.
        log_json: Render JSON lines instead of console lines.
        stream: Destination, ``sys.stderr`` at call time by default.

    Returns:
        The installed handler.
    """
    stream = stream or sys.stderr
    shared = _shared_processors(log_json)

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        if isinstance(old.formatter, structlog.stdlib.ProcessorFormatter):
            logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return handler


def bind_command(name: str) -> None:
    """Tag subsequent log lines with the running subcommand."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=name)

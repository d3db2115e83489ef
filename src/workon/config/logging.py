"""Diagnostic logging for workon.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides how those records look on stderr.  structlog's ProcessorFormatter
renders them either as short console lines (default) or as JSON objects
(``--log-json``) for tools that collect the resolver's diagnostics.

The ``workon`` logger sits at WARNING unless ``--verbose`` is given, so
"can't load module" reports for matching candidates and unusable roots
are always visible.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _pre_chain(log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_json:
        processors += [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
        ]
    return processors


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib log records through a structlog formatter on stderr.

    Args:
        verbose: Show DEBUG records from the ``workon`` loggers, such as
            skipped directories and manifests without a ``go`` directive.
        log_json: One JSON object per record instead of console lines.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(log_json),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("workon").setLevel(logging.DEBUG if verbose else logging.WARNING)

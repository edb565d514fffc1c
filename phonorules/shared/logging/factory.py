"""
structlog setup for phonorules.

Library code only calls get_logger(). Applications that want phonorules'
events rendered call configure_logging() once at startup; everything then
goes through the standard library root logger, so events from other
libraries are rendered the same way.
"""

import logging
import os
import sys
from typing import Dict, List

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    TimeStamper,
    add_log_level,
    CallsiteParameter,
    CallsiteParameterAdder,
    JSONRenderer,
    KeyValueRenderer,
    UnicodeDecoder,
)
from structlog.stdlib import (
    ProcessorFormatter,
    add_logger_name,
    BoundLogger,
)
from structlog.types import Processor

LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_logger(name: str) -> BoundLogger:
    """
    Return a logger whose events carry the service name and version.

    Args:
        name: Dotted component name, e.g. "domain.rules.RuleTextParser"
    """
    return structlog.get_logger(name).bind(
        service="phonorules",
        version=os.getenv("PHONORULES_VERSION", "1.0.0"),
    )


def configure_logging(
    environment: str = "development",
    log_level: str = "INFO",
    json_logs: bool = True,
    include_caller_info: bool = True,
) -> None:
    """
    Route phonorules events to stderr.

    Replaces any handlers already installed on the root logger.

    Args:
        environment: development, test or production; call sites are only
            recorded in development
        log_level: Name of the lowest level emitted; unknown names mean INFO
        json_logs: One JSON object per line when True, key=value pairs otherwise
        include_caller_info: Record file, function and line in development
    """
    level = _get_log_level_int(log_level)
    shared = _shared_processors(environment, include_caller_info)

    structlog.configure(
        processors=shared + [ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[ProcessorFormatter.remove_processors_meta, _renderer(json_logs)],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def _shared_processors(environment: str, include_caller_info: bool) -> List[Processor]:
    """Processors applied to structlog and stdlib records alike."""
    processors: List[Processor] = [
        merge_contextvars,
        TimeStamper(fmt="ISO", utc=True),
        add_log_level,
        add_logger_name,
        UnicodeDecoder(),
    ]

    if include_caller_info and environment == "development":
        processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ],
                additional_ignores=["structlog", "logging"],
            )
        )

    return processors


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return JSONRenderer(sort_keys=True)
    return KeyValueRenderer(key_order=["timestamp", "level", "event", "logger", "build_id"], drop_missing=True)


def _get_log_level_int(level: str) -> int:
    return LOG_LEVELS.get(level.upper(), logging.INFO)

"""
phonorules structured logging.

This module provides structured logging capabilities with:
- JSON or key/value rendering through structlog
- Build ID correlation for repository builds
"""

from .factory import configure_logging, get_logger
from .context import (
    with_build_context,
    generate_build_id,
    get_build_id,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "with_build_context",
    "generate_build_id",
    "get_build_id",
]

"""
Context management for structured logging.
"""

import functools
import uuid
from contextvars import ContextVar
from typing import Any, Callable, Optional, TypeVar

import structlog

# Context variable for repository build tracking
_build_id: ContextVar[Optional[str]] = ContextVar("build_id", default=None)

T = TypeVar("T")


def with_build_context(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator binding a fresh build id to all logs emitted within a function.

    Nested calls reuse the outer build id so that a repository build and
    every catalog it parses share one identifier.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        if _build_id.get() is not None:
            return func(*args, **kwargs)

        build_id = generate_build_id()
        token = _build_id.set(build_id)
        structlog.contextvars.bind_contextvars(build_id=build_id)

        try:
            return func(*args, **kwargs)
        finally:
            structlog.contextvars.unbind_contextvars("build_id")
            _build_id.reset(token)

    return wrapper


def generate_build_id() -> str:
    """Generate a unique build ID."""
    return f"build_{uuid.uuid4().hex[:12]}"


def get_build_id() -> Optional[str]:
    """Get the current build ID from context."""
    return _build_id.get()

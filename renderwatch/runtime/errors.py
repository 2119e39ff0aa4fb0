"""Shared instrumentation exception policy helpers."""

from __future__ import annotations

import logging
from typing import TypeAlias

# Explicitly bounded fallback set for per-call instrumentation paths.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
    ImportError,
    LookupError,
)


class RenderWatchError(Exception):
    """Base class for renderwatch failures surfaced to callers."""


class PrimitiveDispatchUnavailableError(RenderWatchError):
    """Primitive tracking was requested but the dispatcher cannot be intercepted."""


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)

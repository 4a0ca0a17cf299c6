"""Overall deadline for a resolution."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Optional, TypeVar

from .config import validate_timeout
from .errors import ConfigError, ResolutionTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_with_deadline(timeout: Optional[float], work: Awaitable[T]) -> T:
    """Await ``work`` unless ``timeout`` seconds pass first.

    On expiry the task is cancelled, which closes any in-flight connection,
    and ``ResolutionTimeout`` is raised. ``None`` or ``0`` disables the limit.
    """

    try:
        timeout = validate_timeout(timeout)
    except ConfigError:
        if inspect.iscoroutine(work):
            work.close()
        raise
    if timeout is None:
        return await work
    try:
        return await asyncio.wait_for(work, timeout)
    except asyncio.TimeoutError as exc:
        logger.debug("Deadline of %.2f sec. reached, resolution abandoned", timeout)
        raise ResolutionTimeout(f"timeout {timeout:.2f} sec. reached") from exc


__all__ = ["run_with_deadline"]

"""Detached background tasks whose failures are logged, never raised.

Each request hands the teardown of its connection to one of these tasks so
the caller gets its response back as soon as the body is buffered.
"""

from __future__ import annotations

import asyncio
from typing import Any, Coroutine

from .logger import BoundLogger

# The event loop only keeps weak references to tasks.
_pending: set[asyncio.Task[Any]] = set()


def spawn_detached(
    coro: Coroutine[Any, Any, Any],
    logger: BoundLogger,
    *,
    name: str | None = None,
) -> asyncio.Task[Any]:
    """Schedule ``coro`` on the running loop without awaiting it."""
    task = asyncio.get_running_loop().create_task(coro, name=name)
    _pending.add(task)

    def _done(finished: asyncio.Task[Any]) -> None:
        _pending.discard(finished)
        log_task_exception(finished, logger)

    task.add_done_callback(_done)
    return task


def log_task_exception(task: asyncio.Task[Any], logger: BoundLogger) -> BaseException | None:
    """Log the exception of a completed task, if any, and return it."""
    if task.cancelled():
        return None
    exc = task.exception()
    if exc is not None:
        logger.warn("Error in connection (%s): %s", task.get_name(), exc)
    return exc


async def wait_detached() -> None:
    """Wait for every detached task spawned so far, ignoring their outcome."""
    loop = asyncio.get_running_loop()
    while True:
        waiting = [task for task in _pending if task.get_loop() is loop and not task.done()]
        if not waiting:
            return
        await asyncio.gather(*waiting, return_exceptions=True)


__all__ = ["log_task_exception", "spawn_detached", "wait_detached"]

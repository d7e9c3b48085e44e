"""Deferred work hook for the headless renderer.

The engine hands units of work to :func:`schedule_deferred_callback`; they run
on the next turn of the running asyncio event loop. There is no rendering
deadline in memory, so the deadline passed to the work always reports an
unbounded remaining budget.
"""

import asyncio
import math
from typing import Callable

from headless_renderer.shared.exceptions import SchedulingError


class Deadline:
    """Time budget object handed to deferred work."""

    def time_remaining(self) -> float:
        """Milliseconds the work may keep running before it should yield."""
        return math.inf


DEADLINE = Deadline()

DeferredWork = Callable[[Deadline], None]


def schedule_deferred_callback(callback: DeferredWork) -> asyncio.Handle:
    """Run ``callback(DEADLINE)`` on the next turn of the running event loop.

    Args:
        callback: Unit of deferred work

    Returns:
        The event loop handle for the scheduled call

    Raises:
        SchedulingError: If no event loop is running in this thread
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as e:
        raise SchedulingError(
            "Deferred work requires a running asyncio event loop"
        ) from e
    return loop.call_soon(callback, DEADLINE)

"""
Debounced writes — one cancellable timer per persisted slot.

Each push() cancels the slot's pending timer and starts a new one, so only
the value present after a full quiet period ever reaches the action.
Once the quiet period has elapsed the write itself is shielded: a later
push() restarts the timer without interrupting a write already underway.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Delays `action(value)` until `delay` seconds pass without a new push."""

    def __init__(
        self, name: str, delay: float, action: Callable[[T], Awaitable[None]]
    ) -> None:
        self._name = name
        self._delay = delay
        self._action = action
        self._timer: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        """True while a timer is waiting to fire."""
        return self._timer is not None and not self._timer.done()

    def push(self, value: T) -> None:
        """Restart the timer with `value`. Must be called from the event loop."""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(
            self._fire(value), name=f"debounce-{self._name}"
        )

    def cancel(self) -> None:
        """Drop the pending timer, if any. The discarded value is never written."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def wait(self) -> None:
        """Block until the current timer has fired (or was cancelled)."""
        if self._timer is not None:
            await asyncio.wait([self._timer])

    async def _fire(self, value: T) -> None:
        await asyncio.sleep(self._delay)
        await asyncio.shield(self._run(value))

    async def _run(self, value: T) -> None:
        try:
            await self._action(value)
        except Exception as exc:
            logger.warning(f"Debounced write '{self._name}' failed: {type(exc).__name__}: {exc}")
        else:
            logger.debug(f"Debounced write '{self._name}' flushed")

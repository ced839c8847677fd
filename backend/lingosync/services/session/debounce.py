"""
Debounce timer.

Two states: idle (no handle) or pending (one TimerHandle with a deadline).
Scheduling while pending replaces the handle, so at most one timer exists.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs a callback once the event loop has been quiet for `delay` seconds."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self._delay = delay
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def deadline(self) -> Optional[float]:
        """Loop time at which the pending callback fires, if any."""
        return self._handle.when() if self._handle else None

    def schedule(self):
        """Restart the quiet period."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire)

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self):
        self._handle = None
        self._callback()

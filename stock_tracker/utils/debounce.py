# stock_tracker/utils/debounce.py
import asyncio
import logging
from typing import Callable, Optional

from stock_tracker.config import settings

logger = logging.getLogger(__name__)

class Debouncer:
    """
    Coalesces rapid successive calls (e.g. keystrokes in the search box)
    into one call made after `delay` seconds of inactivity. Only the
    arguments of the last call are used.
    """

    def __init__(self, func: Callable, delay: float = None):
        self.func = func
        self.delay = settings.SEARCH_DEBOUNCE_MS / 1000 if delay is None else delay
        self._handle: Optional[asyncio.TimerHandle] = None

    def __call__(self, *args, **kwargs) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, args, kwargs)

    def _fire(self, args, kwargs) -> None:
        self._handle = None
        logger.debug("Debounced call to %s", getattr(self.func, "__name__", self.func))
        self.func(*args, **kwargs)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

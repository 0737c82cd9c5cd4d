# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Height clocks.

The registry never reads wall time directly.  It asks a clock for the
current *height*: a monotonically non-decreasing integer.  Grants expire at
a height, records carry creation/modification heights.

* ``BlockClock``  – production clock, one height per block interval since
  the configured genesis epoch.
* ``ManualClock`` – fixed height that tests and scripts move explicitly.
"""

import threading
import time
from typing import Callable, Optional


class BlockClock:
    """
    Height derived from wall time:
    ``(now - genesis_epoch) // block_interval_seconds``.

    A wall clock can step backwards (NTP, VM resume).  The last height handed
    out is remembered and never undercut.
    """

    def __init__(
        self,
        block_interval_seconds: int = 600,
        genesis_epoch: int = 0,
        now: Optional[Callable[[], float]] = None,
    ):
        if block_interval_seconds <= 0:
            raise ValueError("block_interval_seconds must be positive")
        self._interval = block_interval_seconds
        self._genesis = genesis_epoch
        self._now = now or time.time
        self._last = 0
        self._lock = threading.Lock()

    def current_height(self) -> int:
        height = max(0, int((self._now() - self._genesis) // self._interval))
        with self._lock:
            if height < self._last:
                return self._last
            self._last = height
            return height


class ManualClock:
    """Clock whose height only changes when told to."""

    def __init__(self, height: int = 0):
        self._height = height

    def current_height(self) -> int:
        return self._height

    def set(self, height: int) -> None:
        if height < self._height:
            raise ValueError("height may not go backwards")
        self._height = height

    def advance(self, blocks: int = 1) -> int:
        self.set(self._height + blocks)
        return self._height

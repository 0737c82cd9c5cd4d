# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Execution host seen by the registry.

The registry needs exactly two things from whoever runs it: *who* is calling
and *what height* it is.  Both arrive through a ``HostEnvironment``.
"""

from typing import Protocol

from core.clock import BlockClock
from core.config import settings


class HeightSource(Protocol):
    def current_height(self) -> int: ...


class HostEnvironment(Protocol):
    def current_identity(self) -> str: ...

    def current_height(self) -> int: ...


class RequestHost:
    """Host for one HTTP request: the authenticated principal plus a clock."""

    def __init__(self, identity: str, clock: HeightSource):
        self._identity = identity
        self._clock = clock

    def current_identity(self) -> str:
        return self._identity

    def current_height(self) -> int:
        return self._clock.current_height()


# Process-wide chain clock shared by every request.
chain_clock = BlockClock(
    block_interval_seconds=settings.block_interval_seconds,
    genesis_epoch=settings.genesis_epoch,
)


def get_clock() -> HeightSource:
    """FastAPI dependency – overridable in tests."""
    return chain_clock

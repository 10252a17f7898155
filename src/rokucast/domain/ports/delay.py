"""Port for real-time pacing of device automation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DelayPort(Protocol):
    """Suspends the calling coroutine; tests substitute virtual time."""

    async def sleep(self, seconds: float) -> None: ...

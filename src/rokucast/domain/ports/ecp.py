"""Port for the Roku External Control Protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EcpClientPort(Protocol):
    """Async interface to one or more Roku devices over ECP.

    Every call raises ``DeviceUnreachableError`` on network failure and
    ``CommandRejectedError`` on a non-success response.
    """

    async def launch(self, device: str, channel_id: str, params: str = "") -> None: ...

    async def keypress(self, device: str, key_name: str) -> None: ...

    async def query_apps(self, device: str) -> list[dict[str, str]]: ...

    async def query_device_info(self, device: str) -> dict[str, str]: ...

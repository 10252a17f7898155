"""Shared test fixtures for rokucast test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from rokucast.domain.entities.content import RokuContent
from rokucast.domain.entities.playback import CommandRejectedError
from rokucast.infrastructure.channels.emby import EmbyChannelPlugin
from rokucast.infrastructure.channels.registry import ChannelRegistry
from rokucast.infrastructure.channels.streaming import (
    STREAMING_CHANNELS,
    StreamingChannelPlugin,
)
from rokucast.infrastructure.ecp.executor import CommandExecutor

DEVICE = "192.168.1.50"
EMBY_SERVER = "http://emby.local:8096"

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@dataclass
class FakeEcpClient:
    """Records every ECP call; can reject the N-th request (0-based)."""

    reject_at: int | None = None
    reject_status: int = 500
    calls: list[tuple[Any, ...]] = field(default_factory=list)
    apps: list[dict[str, str]] = field(default_factory=list)
    device_info: dict[str, str] = field(default_factory=dict)

    def _record(self, call: tuple[Any, ...], path: str) -> None:
        if self.reject_at is not None and len(self.calls) == self.reject_at:
            self.calls.append(call)
            raise CommandRejectedError(
                call[1], f"http://{call[1]}:8060{path}", self.reject_status
            )
        self.calls.append(call)

    async def launch(self, device: str, channel_id: str, params: str = "") -> None:
        self._record(("launch", device, channel_id, params), f"/launch/{channel_id}")

    async def keypress(self, device: str, key_name: str) -> None:
        self._record(("keypress", device, key_name), f"/keypress/{key_name}")

    async def query_apps(self, device: str) -> list[dict[str, str]]:
        return self.apps

    async def query_device_info(self, device: str) -> dict[str, str]:
        return self.device_info


@dataclass
class RecordingDelay:
    """DelayPort that records requested pauses without sleeping."""

    sleeps: list[float] = field(default_factory=list)

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_ecp() -> FakeEcpClient:
    return FakeEcpClient()


@pytest.fixture()
def delay() -> RecordingDelay:
    return RecordingDelay()


@pytest.fixture()
def executor(fake_ecp: FakeEcpClient, delay: RecordingDelay) -> CommandExecutor:
    return CommandExecutor(ecp=fake_ecp, delay=delay)


@pytest.fixture()
def streaming_plugins() -> list[StreamingChannelPlugin]:
    return [StreamingChannelPlugin(channel) for channel in STREAMING_CHANNELS]


@pytest.fixture()
def streaming_registry(
    streaming_plugins: list[StreamingChannelPlugin],
) -> ChannelRegistry:
    return ChannelRegistry(streaming_plugins)


@pytest.fixture()
def emby_content() -> RokuContent:
    return RokuContent(
        channel_id="44191",
        content_id="541",
        media_type="Movie",
        title="The Matrix (1999)",
        channel_name="Emby",
        metadata={"resume_position_ticks": 18_000_000_000},
    )


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def emby(http_client: httpx.AsyncClient) -> EmbyChannelPlugin:
    return EmbyChannelPlugin(
        server_url=EMBY_SERVER,
        api_key="emby-key",
        user_id="user-1",
        http_client=http_client,
    )

"""Tests for PlayUseCase and ChannelInfoUseCase."""

from __future__ import annotations

from typing import Any

import pytest

from rokucast.application.use_cases import ChannelInfoUseCase, PlayUseCase
from rokucast.domain.entities.commands import ActionSequence, DeepLink
from rokucast.domain.entities.content import ChannelInfo, RokuContent
from rokucast.domain.entities.playback import CommandRejectedError
from rokucast.domain.plugins import (
    PluginError,
    PluginNotFoundError,
    UnknownChannelError,
)
from rokucast.infrastructure.channels.registry import ChannelRegistry
from rokucast.infrastructure.ecp.executor import CommandExecutor
from rokucast.infrastructure.plugins.registry import PluginRegistry
from rokucast.infrastructure.plugins.roku import RokuPlugin

_DEVICE = "192.168.1.50"


class _SearchOnlyPlugin:
    name = "web"
    description = "search only"
    channel_based = False

    async def search(self, query: str, limit: int) -> list[Any]:
        return []


@pytest.fixture()
def roku(
    streaming_registry: ChannelRegistry, executor: CommandExecutor, fake_ecp: Any
) -> RokuPlugin:
    return RokuPlugin(
        device_ip=_DEVICE,
        device_name="Living Room",
        channels=streaming_registry,
        executor=executor,
        ecp=fake_ecp,
    )


class TestPlayUseCase:
    async def test_play_from_library_entry(
        self, roku: RokuPlugin, fake_ecp: Any
    ) -> None:
        uc = PlayUseCase(PluginRegistry([roku]))

        command = await uc.execute(
            {"channelId": "12", "contentId": "81444554", "mediaType": "movie"}
        )

        assert isinstance(command, ActionSequence)
        assert fake_ecp.calls[0] == (
            "launch",
            _DEVICE,
            "12",
            "contentId=81444554&mediaType=movie",
        )

    async def test_dry_run_sends_nothing(self, roku: RokuPlugin, fake_ecp: Any) -> None:
        uc = PlayUseCase(PluginRegistry([roku]))

        command = await uc.execute(
            RokuContent(channel_id="291097", content_id="abc-123"), dry_run=True
        )

        assert isinstance(command, ActionSequence)
        assert fake_ecp.calls == []

    async def test_emby_content(
        self,
        streaming_plugins: list[Any],
        emby: Any,
        executor: CommandExecutor,
        fake_ecp: Any,
    ) -> None:
        roku = RokuPlugin(
            device_ip=_DEVICE,
            device_name="Living Room",
            channels=ChannelRegistry([emby, *streaming_plugins]),
            executor=executor,
            ecp=fake_ecp,
        )
        uc = PlayUseCase(PluginRegistry([roku]))

        command = await uc.execute(
            {
                "channelId": "44191",
                "contentId": "541",
                "metadata": {"resumePositionTicks": 36000000000},
            }
        )

        assert command == DeepLink(
            "44191", "Command=PlayNow&ItemIds=541&StartPositionTicks=36000000000"
        )

    async def test_unknown_channel(self, roku: RokuPlugin) -> None:
        uc = PlayUseCase(PluginRegistry([roku]))
        with pytest.raises(UnknownChannelError):
            await uc.execute({"channelId": "5", "contentId": "1"})

    async def test_invalid_entry(self, roku: RokuPlugin) -> None:
        uc = PlayUseCase(PluginRegistry([roku]))
        with pytest.raises(ValueError, match="content_id"):
            await uc.execute({"channelId": "12"})

    async def test_rejection_propagates(self, roku: RokuPlugin, fake_ecp: Any) -> None:
        fake_ecp.reject_at = 0
        uc = PlayUseCase(PluginRegistry([roku]))
        with pytest.raises(CommandRejectedError):
            await uc.execute({"channelId": "12", "contentId": "1"})

    async def test_missing_plugin(self) -> None:
        uc = PlayUseCase(PluginRegistry([]))
        with pytest.raises(PluginNotFoundError):
            await uc.execute({"channelId": "12", "contentId": "1"})

    async def test_plugin_without_playback(self) -> None:
        uc = PlayUseCase(PluginRegistry([_SearchOnlyPlugin()]), plugin_name="web")
        with pytest.raises(PluginError, match="does not support playback"):
            await uc.execute({"channelId": "12", "contentId": "1"})


class TestChannelInfoUseCase:
    def test_lists_channels_of_channel_based_plugins(self, roku: RokuPlugin) -> None:
        uc = ChannelInfoUseCase(PluginRegistry([roku, _SearchOnlyPlugin()]))

        channels = uc.execute()

        assert channels[0] == ChannelInfo(
            "12", "Netflix", "https://www.netflix.com/search"
        )
        assert [c.channel_id for c in channels] == ["12", "291097", "61322", "13"]

    def test_empty_without_channel_plugins(self) -> None:
        uc = ChannelInfoUseCase(PluginRegistry([_SearchOnlyPlugin()]))
        assert uc.execute() == []

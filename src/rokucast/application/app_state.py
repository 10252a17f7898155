"""Application state container built by the composition root."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from rokucast.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from rokucast.application.use_cases import (
        ChannelInfoUseCase,
        PlayUseCase,
        SearchAllUseCase,
    )
    from rokucast.infrastructure.channels import ChannelRegistry
    from rokucast.infrastructure.ecp import CommandExecutor, HttpxEcpClient
    from rokucast.infrastructure.plugins import PluginRegistry, RokuPlugin


@dataclass
class AppState:
    """All wired resources; lifecycle managed by composition.py::lifespan()."""

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    ecp: HttpxEcpClient
    executor: CommandExecutor
    channels: ChannelRegistry

    # Plugins
    roku: RokuPlugin
    plugins: PluginRegistry

    # Use cases
    search_all: SearchAllUseCase
    play: PlayUseCase
    channel_info: ChannelInfoUseCase

"""Composition root: builds every component from an AppConfig."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from rokucast.application.app_state import AppState
from rokucast.application.use_cases import (
    ChannelInfoUseCase,
    PlayUseCase,
    SearchAllUseCase,
)
from rokucast.domain.ports.delay import DelayPort
from rokucast.infrastructure.channels import build_channel_registry
from rokucast.infrastructure.config import AppConfig
from rokucast.infrastructure.ecp import CommandExecutor, HttpxEcpClient
from rokucast.infrastructure.plugins import PluginRegistry, RokuPlugin
from rokucast.infrastructure.search import BraveStreamingSearchProvider

log = structlog.get_logger(__name__)


def build_state(
    config: AppConfig,
    http_client: httpx.AsyncClient,
    *,
    delay: DelayPort | None = None,
) -> AppState:
    """Wire all components around an existing HTTP client.

    Order matters:
        1. Channel registry (uses HTTP client for native search)
        2. ECP client + executor
        3. Web search provider (needs the channel registry)
        4. Roku plugin + plugin registry
        5. Use cases
    """
    channels = build_channel_registry(config.channels, http_client)

    ecp = HttpxEcpClient(http_client=http_client, port=config.roku.port)
    executor = CommandExecutor(
        ecp=ecp,
        delay=delay,
        keypress_delay_ms=config.roku.keypress_delay_ms,
        char_delay_ms=config.roku.char_delay_ms,
    )

    web_search = BraveStreamingSearchProvider(
        api_key=config.search.brave_api_key,
        http_client=http_client,
        channels=channels,
    )
    log.info("web_search_configured", provider="brave", enabled=web_search.enabled)

    roku = RokuPlugin(
        device_ip=config.roku.device_ip,
        device_name=config.roku.device_name,
        channels=channels,
        executor=executor,
        ecp=ecp,
        web_search=web_search if web_search.enabled else None,
        web_max_results=config.search.brave_max_results,
        search_timeout=config.search.source_timeout_seconds,
    )
    plugins = PluginRegistry([roku])

    return AppState(
        config=config,
        http_client=http_client,
        ecp=ecp,
        executor=executor,
        channels=channels,
        roku=roku,
        plugins=plugins,
        search_all=SearchAllUseCase(
            plugins,
            default_limit=config.search.default_limit,
            plugin_timeout=config.search.plugin_timeout_seconds,
        ),
        play=PlayUseCase(plugins, plugin_name=roku.name),
        channel_info=ChannelInfoUseCase(plugins),
    )


@asynccontextmanager
async def lifespan(
    config: AppConfig,
    *,
    delay: DelayPort | None = None,
) -> AsyncIterator[AppState]:
    """Create the shared HTTP client, wire the app, and close it on exit."""
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=True,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)
    try:
        yield build_state(config, http_client, delay=delay)
    finally:
        await http_client.aclose()
        log.debug("http_client_closed")

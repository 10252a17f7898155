"""Immutable channel registry keyed by Roku channel id."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

import structlog

from rokucast.domain.entities.content import ChannelInfo, RokuContent
from rokucast.domain.plugins import (
    ChannelPluginProtocol,
    DuplicatePluginError,
    UnknownChannelError,
)

log = structlog.get_logger(__name__)


class ChannelRegistry(Mapping[str, ChannelPluginProtocol]):
    """
    Channel plugins indexed by ``channel_id``.

    Built once at startup and never mutated afterwards, so it can be
    shared between concurrent requests without locking.  Iteration order
    is registration order, which is also the order ``extract_from_url``
    tries channels in.
    """

    def __init__(self, plugins: Iterable[ChannelPluginProtocol] = ()) -> None:
        by_id: dict[str, ChannelPluginProtocol] = {}
        for plugin in plugins:
            if plugin.channel_id in by_id:
                raise DuplicatePluginError(
                    f"Channel ID '{plugin.channel_id}' already registered "
                    f"({by_id[plugin.channel_id].channel_name})"
                )
            by_id[plugin.channel_id] = plugin
        self._plugins = MappingProxyType(by_id)
        log.info(
            "channel_registry_built",
            count=len(by_id),
            channels=[p.channel_name for p in by_id.values()],
        )

    def __getitem__(self, channel_id: str) -> ChannelPluginProtocol:
        return self._plugins[channel_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def resolve(self, channel_id: str) -> ChannelPluginProtocol:
        """Return the plugin for *channel_id* or raise ``UnknownChannelError``."""
        plugin = self._plugins.get(channel_id)
        if plugin is None:
            raise UnknownChannelError(channel_id)
        return plugin

    def extract_from_url(
        self,
        url: str,
        title: str | None = None,
        description: str | None = None,
    ) -> RokuContent | None:
        """Ask each channel in order; the first recognizer wins."""
        for plugin in self._plugins.values():
            content = plugin.extract_from_url(url, title, description)
            if content is not None:
                return content
        return None

    def public_domains(self) -> list[str]:
        """Non-empty public search domains, in registration order."""
        return [
            p.public_search_domain
            for p in self._plugins.values()
            if p.public_search_domain
        ]

    def channel_info(self) -> list[ChannelInfo]:
        return [
            ChannelInfo(
                channel_id=p.channel_id,
                channel_name=p.channel_name,
                search_url=p.search_url,
            )
            for p in self._plugins.values()
        ]

    def __repr__(self) -> str:
        return f"ChannelRegistry({list(self._plugins)!r})"

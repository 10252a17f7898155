from .delay import DelayPort
from .ecp import EcpClientPort
from .plugin_registry import PluginRegistryPort
from .web_search import StreamingSearchPort

__all__ = [
    "DelayPort",
    "EcpClientPort",
    "PluginRegistryPort",
    "StreamingSearchPort",
]

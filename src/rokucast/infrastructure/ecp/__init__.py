from __future__ import annotations

from .client import ECP_PORT, HttpxEcpClient
from .executor import AsyncioDelay, CommandExecutor, literal_key

__all__ = [
    "AsyncioDelay",
    "CommandExecutor",
    "ECP_PORT",
    "HttpxEcpClient",
    "literal_key",
]

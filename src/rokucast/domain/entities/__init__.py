from .commands import (
    Action,
    ActionSequence,
    DeepLink,
    Launch,
    PlaybackCommand,
    Press,
    RokuKey,
    Type,
    Wait,
)
from .content import ChannelInfo, RokuContent
from .playback import CommandRejectedError, DeviceUnreachableError, PlaybackError

# search.py depends on domain.plugins; import it by full path to avoid a cycle.

__all__ = [
    "Action",
    "ActionSequence",
    "ChannelInfo",
    "CommandRejectedError",
    "DeepLink",
    "DeviceUnreachableError",
    "Launch",
    "PlaybackCommand",
    "PlaybackError",
    "Press",
    "RokuContent",
    "RokuKey",
    "Type",
    "Wait",
]

"""Playback commands and the remote-control action vocabulary.

A channel plugin turns stored content into exactly one ``PlaybackCommand``:

- ``DeepLink``: one ECP launch call that opens the content directly.
- ``ActionSequence``: an ordered, open-loop list of ``Action`` steps
  (launch, key press, text entry, wait) replayed against the device.

All types are frozen; a command is built once per play request and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class RokuKey(str, Enum):
    """Remote control keys; the value is the ECP ``/keypress`` name."""

    HOME = "Home"
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"
    SELECT = "Select"
    BACK = "Back"
    BACKSPACE = "Backspace"
    PLAY = "Play"
    PAUSE = "Pause"
    REV = "Rev"
    FWD = "Fwd"
    INSTANT_REPLAY = "InstantReplay"
    INFO = "Info"
    SEARCH = "Search"


@dataclass(frozen=True)
class Launch:
    """Launch a channel, optionally with an ``&``-joined param string."""

    channel_id: str
    params: str = ""


@dataclass(frozen=True)
class Press:
    """Press ``key`` ``count`` times."""

    key: RokuKey
    count: int = 1

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Press count must be >= 1, got {self.count}")


@dataclass(frozen=True)
class Type:
    """Enter text one character at a time."""

    text: str


@dataclass(frozen=True)
class Wait:
    """Pause the sequence without touching the device."""

    milliseconds: int

    def __post_init__(self) -> None:
        if self.milliseconds < 0:
            raise ValueError(
                f"Wait milliseconds must be >= 0, got {self.milliseconds}"
            )


Action = Union[Launch, Press, Type, Wait]


@dataclass(frozen=True)
class DeepLink:
    """Single resolved launch call: ``/launch/<channel_id>?<params>``."""

    channel_id: str
    params: str


@dataclass(frozen=True)
class ActionSequence:
    """Ordered multi-step automation."""

    actions: tuple[Action, ...]

    def __post_init__(self) -> None:
        # Accept any iterable from callers but store an immutable tuple.
        if not isinstance(self.actions, tuple):
            object.__setattr__(self, "actions", tuple(self.actions))


PlaybackCommand = Union[DeepLink, ActionSequence]


def describe_action(action: Action) -> str:
    """Short human-readable form used in logs and error messages."""
    if isinstance(action, Launch):
        suffix = f"?{action.params}" if action.params else ""
        return f"launch {action.channel_id}{suffix}"
    if isinstance(action, Press):
        return f"press {action.key.value} x{action.count}"
    if isinstance(action, Type):
        return f"type {action.text!r}"
    if isinstance(action, Wait):
        return f"wait {action.milliseconds}ms"
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def action_to_dict(action: Action) -> dict[str, Any]:
    if isinstance(action, Launch):
        return {"type": "launch", "channelId": action.channel_id, "params": action.params}
    if isinstance(action, Press):
        return {"type": "press", "key": action.key.value, "count": action.count}
    if isinstance(action, Type):
        return {"type": "type", "text": action.text}
    if isinstance(action, Wait):
        return {"type": "wait", "milliseconds": action.milliseconds}
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def command_to_dict(command: PlaybackCommand) -> dict[str, Any]:
    """JSON-friendly form of a command (CLI dry runs, debug logs)."""
    if isinstance(command, DeepLink):
        return {
            "type": "deep_link",
            "channelId": command.channel_id,
            "params": command.params,
        }
    if isinstance(command, ActionSequence):
        return {
            "type": "action_sequence",
            "actions": [action_to_dict(a) for a in command.actions],
        }
    raise TypeError(f"Unknown command type: {type(command).__name__}")

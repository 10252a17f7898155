"""Executes playback commands against a Roku device.

Sequences are open-loop: the device gives no feedback about what is on
screen, so steps are paced by fixed delays and a rejected step aborts the
rest without undoing anything already sent.
"""

from __future__ import annotations

import asyncio
import weakref

import structlog

from rokucast.domain.entities.commands import (
    Action,
    ActionSequence,
    DeepLink,
    Launch,
    PlaybackCommand,
    Press,
    Type,
    Wait,
    describe_action,
)
from rokucast.domain.entities.playback import (
    CommandRejectedError,
    DeviceUnreachableError,
)
from rokucast.domain.ports.delay import DelayPort
from rokucast.domain.ports.ecp import EcpClientPort

log = structlog.get_logger(__name__)

KEYPRESS_DELAY_MS = 100
CHAR_DELAY_MS = 50


class AsyncioDelay:
    """``DelayPort`` backed by ``asyncio.sleep``."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


def literal_key(char: str) -> str | None:
    """ECP key name for one typed character, or None if unsupported.

    Only ASCII letters (sent upper-case), digits and space are supported.
    """
    if char == " ":
        return "Lit_%20"
    if char.isascii() and char.isalpha():
        return f"Lit_{char.upper()}"
    if char.isascii() and char.isdigit():
        return f"Lit_{char}"
    return None


class CommandExecutor:
    """Sends ``PlaybackCommand`` objects to devices over ECP.

    Commands for the same device are serialized with a per-device lock so
    two sequences never interleave key presses.  Commands for different
    devices run concurrently.
    """

    def __init__(
        self,
        *,
        ecp: EcpClientPort,
        delay: DelayPort | None = None,
        keypress_delay_ms: int = KEYPRESS_DELAY_MS,
        char_delay_ms: int = CHAR_DELAY_MS,
    ) -> None:
        self._ecp = ecp
        self._delay = delay or AsyncioDelay()
        self._keypress_delay = keypress_delay_ms / 1000
        self._char_delay = char_delay_ms / 1000
        # Entries live only while a command holds or awaits the lock.
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, device: str) -> asyncio.Lock:
        lock = self._locks.get(device)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[device] = lock
        return lock

    async def execute(self, device: str, command: PlaybackCommand) -> None:
        """Run *command* on *device*.

        Raises:
            DeviceUnreachableError: network failure; remaining steps skipped.
            CommandRejectedError: non-2xx answer.

            For action sequences both errors carry the failing step.
            asyncio.CancelledError: propagated; stops at the current step.
        """
        async with self._lock_for(device):
            if isinstance(command, DeepLink):
                log.info(
                    "playback_deep_link",
                    device=device,
                    channel_id=command.channel_id,
                )
                await self._ecp.launch(device, command.channel_id, command.params)
                return
            if isinstance(command, ActionSequence):
                await self._run_sequence(device, command)
                return
            raise TypeError(f"Unknown command type: {type(command).__name__}")

    async def _run_sequence(self, device: str, sequence: ActionSequence) -> None:
        total = len(sequence.actions)
        log.info("playback_sequence_started", device=device, steps=total)
        for index, action in enumerate(sequence.actions):
            log.debug(
                "playback_step",
                device=device,
                step=index + 1,
                of=total,
                action=describe_action(action),
            )
            try:
                await self._run_action(device, action)
            except (CommandRejectedError, DeviceUnreachableError) as exc:
                raise exc.at_step(index, action) from exc
            except asyncio.CancelledError:
                log.warning(
                    "playback_sequence_cancelled",
                    device=device,
                    step=index + 1,
                    of=total,
                )
                raise
        log.info("playback_sequence_completed", device=device, steps=total)

    async def _run_action(self, device: str, action: Action) -> None:
        if isinstance(action, Launch):
            await self._ecp.launch(device, action.channel_id, action.params)
        elif isinstance(action, Press):
            for _ in range(action.count):
                await self._ecp.keypress(device, action.key.value)
                await self._delay.sleep(self._keypress_delay)
        elif isinstance(action, Type):
            await self._type_text(device, action.text)
        elif isinstance(action, Wait):
            await self._delay.sleep(action.milliseconds / 1000)
        else:
            raise TypeError(f"Unknown action type: {type(action).__name__}")

    async def _type_text(self, device: str, text: str) -> None:
        for char in text:
            key = literal_key(char)
            if key is None:
                log.warning("unsupported_character_skipped", device=device, char=char)
                continue
            await self._ecp.keypress(device, key)
            await self._delay.sleep(self._char_delay)

"""Playback failures raised while talking to a device."""

from __future__ import annotations

from rokucast.domain.entities.commands import Action, describe_action


def _where(step_index: int | None, action: Action | None) -> str:
    if step_index is None or action is None:
        return ""
    return f" at step {step_index + 1} ({describe_action(action)})"


class PlaybackError(Exception):
    """Base error for play requests.

    The control protocol has no feedback channel, so every failure means
    playback could not be confirmed to start.
    """


class DeviceUnreachableError(PlaybackError):
    """Network failure reaching the device (not retried).

    Inside an action sequence ``step_index`` and ``action`` identify the
    step that could not be sent.
    """

    def __init__(
        self,
        device: str,
        url: str,
        reason: str = "",
        *,
        step_index: int | None = None,
        action: Action | None = None,
    ) -> None:
        self.device = device
        self.url = url
        self.reason = reason
        self.step_index = step_index
        self.action = action
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Roku device {device} unreachable at {url}"
            f"{_where(step_index, action)}{detail}"
        )

    def at_step(self, step_index: int, action: Action) -> DeviceUnreachableError:
        """Return a copy attributed to a specific sequence step."""
        return DeviceUnreachableError(
            self.device,
            self.url,
            self.reason,
            step_index=step_index,
            action=action,
        )


class CommandRejectedError(PlaybackError):
    """Device answered a request with a non-success status.

    Steps already sent cannot be undone; ``step_index`` and ``action``
    identify where the sequence stopped.
    """

    def __init__(
        self,
        device: str,
        url: str,
        status_code: int,
        *,
        step_index: int | None = None,
        action: Action | None = None,
    ) -> None:
        self.device = device
        self.url = url
        self.status_code = status_code
        self.step_index = step_index
        self.action = action
        super().__init__(
            f"Roku device {device} rejected {url} with HTTP {status_code}"
            f"{_where(step_index, action)}"
        )

    def at_step(self, step_index: int, action: Action) -> CommandRejectedError:
        """Return a copy attributed to a specific sequence step."""
        return CommandRejectedError(
            self.device,
            self.url,
            self.status_code,
            step_index=step_index,
            action=action,
        )

"""Tests for CommandExecutor."""

from __future__ import annotations

import asyncio
import gc
from typing import Any

import pytest

from rokucast.domain.entities.commands import (
    ActionSequence,
    DeepLink,
    Launch,
    Press,
    RokuKey,
    Type,
    Wait,
)
from rokucast.domain.entities.playback import (
    CommandRejectedError,
    DeviceUnreachableError,
)
from rokucast.infrastructure.ecp.executor import CommandExecutor, literal_key

_DEVICE = "192.168.1.50"


class TestLiteralKey:
    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("a", "Lit_A"),
            ("Z", "Lit_Z"),
            ("7", "Lit_7"),
            (" ", "Lit_%20"),
            ("!", None),
            ("é", None),
            ("-", None),
        ],
    )
    def test_mapping(self, char: str, expected: str | None) -> None:
        assert literal_key(char) == expected


class TestDeepLink:
    async def test_single_launch(self, executor: CommandExecutor, fake_ecp: Any) -> None:
        await executor.execute(
            _DEVICE, DeepLink("44191", "Command=PlayNow&ItemIds=541")
        )

        assert fake_ecp.calls == [
            ("launch", _DEVICE, "44191", "Command=PlayNow&ItemIds=541")
        ]

    async def test_rejection_propagates(
        self, executor: CommandExecutor, fake_ecp: Any
    ) -> None:
        fake_ecp.reject_at = 0
        with pytest.raises(CommandRejectedError):
            await executor.execute(_DEVICE, DeepLink("44191", "x=1"))


class TestActionSequence:
    async def test_calls_in_order(
        self, executor: CommandExecutor, fake_ecp: Any, delay: Any
    ) -> None:
        seq = ActionSequence(
            (
                Launch("12", "contentId=81444554&mediaType=movie"),
                Wait(2000),
                Press(RokuKey.PLAY, 1),
            )
        )

        await executor.execute(_DEVICE, seq)

        assert fake_ecp.calls == [
            ("launch", _DEVICE, "12", "contentId=81444554&mediaType=movie"),
            ("keypress", _DEVICE, "Play"),
        ]
        # Wait(2000) then the 100 ms post-keypress pause
        assert delay.sleeps == [2.0, 0.1]

    async def test_press_count_repeats(
        self, executor: CommandExecutor, fake_ecp: Any, delay: Any
    ) -> None:
        await executor.execute(_DEVICE, ActionSequence((Press(RokuKey.DOWN, 3),)))

        assert fake_ecp.calls == [("keypress", _DEVICE, "Down")] * 3
        assert delay.sleeps == [0.1, 0.1, 0.1]

    async def test_type_skips_unsupported_characters(
        self, executor: CommandExecutor, fake_ecp: Any, delay: Any
    ) -> None:
        seq = ActionSequence(
            (Type("Hi 2!"), Press(RokuKey.SELECT))
        )

        await executor.execute(_DEVICE, seq)

        assert fake_ecp.calls == [
            ("keypress", _DEVICE, "Lit_H"),
            ("keypress", _DEVICE, "Lit_I"),
            ("keypress", _DEVICE, "Lit_%20"),
            ("keypress", _DEVICE, "Lit_2"),
            ("keypress", _DEVICE, "Select"),
        ]
        assert delay.sleeps == [0.05, 0.05, 0.05, 0.05, 0.1]

    async def test_custom_delays(self, fake_ecp: Any, delay: Any) -> None:
        executor = CommandExecutor(
            ecp=fake_ecp, delay=delay, keypress_delay_ms=250, char_delay_ms=0
        )
        await executor.execute(
            _DEVICE, ActionSequence((Type("ab"), Press(RokuKey.HOME)))
        )
        assert delay.sleeps == [0.0, 0.0, 0.25]

    async def test_rejection_aborts_remaining_steps(
        self, executor: CommandExecutor, fake_ecp: Any
    ) -> None:
        fake_ecp.reject_at = 1
        fake_ecp.reject_status = 503
        seq = ActionSequence(
            (
                Launch("291097", "contentId=abc&mediaType=movie"),
                Wait(2000),
                Press(RokuKey.SELECT),
                Press(RokuKey.PLAY),
            )
        )

        with pytest.raises(CommandRejectedError) as exc_info:
            await executor.execute(_DEVICE, seq)

        err = exc_info.value
        assert err.status_code == 503
        assert err.step_index == 2
        assert err.action == Press(RokuKey.SELECT)
        assert "step 3" in str(err)
        # Launch sent, Select attempted, Play never sent
        assert [c[0] for c in fake_ecp.calls] == ["launch", "keypress"]

    async def test_unreachable_aborts(self, delay: Any) -> None:
        class _DownEcp:
            calls = 0

            async def launch(self, device: str, channel_id: str, params: str = "") -> None:
                self.calls += 1
                raise DeviceUnreachableError(device, "http://x", "refused")

            async def keypress(self, device: str, key_name: str) -> None:
                self.calls += 1

        ecp = _DownEcp()
        executor = CommandExecutor(ecp=ecp, delay=delay)  # type: ignore[arg-type]

        with pytest.raises(DeviceUnreachableError) as exc_info:
            await executor.execute(
                _DEVICE, ActionSequence((Launch("12"), Press(RokuKey.PLAY)))
            )

        err = exc_info.value
        assert err.device == _DEVICE
        assert err.step_index == 0
        assert err.action == Launch("12")
        assert "step 1" in str(err)
        assert err.reason == "refused"
        assert ecp.calls == 1

    async def test_unreachable_mid_sequence_names_step(self, delay: Any) -> None:
        class _DropsAfterLaunch:
            async def launch(self, device: str, channel_id: str, params: str = "") -> None:
                return None

            async def keypress(self, device: str, key_name: str) -> None:
                raise DeviceUnreachableError(device, f"http://{device}:8060", "reset")

        ecp = _DropsAfterLaunch()
        executor = CommandExecutor(ecp=ecp, delay=delay)  # type: ignore[arg-type]
        seq = ActionSequence((Launch("12"), Wait(2000), Press(RokuKey.PLAY)))

        with pytest.raises(DeviceUnreachableError) as exc_info:
            await executor.execute(_DEVICE, seq)

        assert exc_info.value.step_index == 2
        assert exc_info.value.action == Press(RokuKey.PLAY)
        assert "step 3" in str(exc_info.value)

    async def test_deep_link_unreachable_has_no_step(self, delay: Any) -> None:
        class _DownEcp:
            async def launch(self, device: str, channel_id: str, params: str = "") -> None:
                raise DeviceUnreachableError(device, "http://x")

        executor = CommandExecutor(ecp=_DownEcp(), delay=delay)  # type: ignore[arg-type]

        with pytest.raises(DeviceUnreachableError) as exc_info:
            await executor.execute(_DEVICE, DeepLink("44191", "x=1"))

        assert exc_info.value.step_index is None

    async def test_empty_sequence(self, executor: CommandExecutor, fake_ecp: Any) -> None:
        await executor.execute(_DEVICE, ActionSequence(()))
        assert fake_ecp.calls == []

    async def test_unknown_command_type(self, executor: CommandExecutor) -> None:
        with pytest.raises(TypeError):
            await executor.execute(_DEVICE, "launch")  # type: ignore[arg-type]


class TestConcurrency:
    async def test_cancellation_stops_sequence(self, fake_ecp: Any) -> None:
        started = asyncio.Event()

        class _BlockingDelay:
            async def sleep(self, seconds: float) -> None:
                started.set()
                await asyncio.Event().wait()

        executor = CommandExecutor(ecp=fake_ecp, delay=_BlockingDelay())
        seq = ActionSequence((Launch("12"), Wait(2000), Press(RokuKey.PLAY)))

        task = asyncio.create_task(executor.execute(_DEVICE, seq))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert fake_ecp.calls == [("launch", _DEVICE, "12", "")]

    async def test_same_device_sequences_do_not_interleave(self, fake_ecp: Any) -> None:
        class _YieldingDelay:
            async def sleep(self, seconds: float) -> None:
                await asyncio.sleep(0)

        executor = CommandExecutor(ecp=fake_ecp, delay=_YieldingDelay())
        first = ActionSequence((Press(RokuKey.UP, 3),))
        second = ActionSequence((Press(RokuKey.DOWN, 3),))

        await asyncio.gather(
            executor.execute(_DEVICE, first),
            executor.execute(_DEVICE, second),
        )

        keys = [c[2] for c in fake_ecp.calls]
        assert keys in (
            ["Up"] * 3 + ["Down"] * 3,
            ["Down"] * 3 + ["Up"] * 3,
        )

    async def test_different_devices_run_concurrently(self, fake_ecp: Any) -> None:
        class _YieldingDelay:
            async def sleep(self, seconds: float) -> None:
                await asyncio.sleep(0)

        executor = CommandExecutor(ecp=fake_ecp, delay=_YieldingDelay())
        seq = ActionSequence((Press(RokuKey.UP, 2),))

        await asyncio.gather(
            executor.execute("10.0.0.1", seq),
            executor.execute("10.0.0.2", seq),
        )

        devices = [c[1] for c in fake_ecp.calls]
        assert devices == ["10.0.0.1", "10.0.0.2", "10.0.0.1", "10.0.0.2"]

    async def test_idle_device_locks_are_released(
        self, executor: CommandExecutor
    ) -> None:
        for i in range(3):
            await executor.execute(f"10.0.0.{i}", ActionSequence((Launch("12"),)))
        gc.collect()

        assert len(executor._locks) == 0

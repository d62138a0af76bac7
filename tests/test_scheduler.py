"""
Tests for the periodic timer.
"""

import asyncio

import pytest

from dpa_guard.services import PeriodicTimer


@pytest.mark.asyncio
async def test_timer_fires_after_delay_and_repeats():
    fired = []

    async def on_fire(name):
        fired.append(name)

    timer = PeriodicTimer(on_fire=on_fire)
    timer.register("refreshDpaList", initial_delay=0.01, period=0.02)
    await asyncio.sleep(0.1)
    await timer.shutdown()

    assert len(fired) >= 2
    assert set(fired) == {"refreshDpaList"}
    assert timer.names == []


@pytest.mark.asyncio
async def test_failing_callback_does_not_stop_timer():
    calls = []

    async def on_fire(name):
        calls.append(name)
        raise RuntimeError("boom")

    timer = PeriodicTimer(on_fire=on_fire)
    timer.register("t", initial_delay=0, period=0.01)
    await asyncio.sleep(0.06)
    await timer.shutdown()

    assert len(calls) >= 2


@pytest.mark.asyncio
async def test_cancel_and_reregister():
    fired = []

    async def on_fire(name):
        fired.append(name)

    timer = PeriodicTimer(on_fire=on_fire)
    timer.register("t", initial_delay=10, period=10)
    timer.register("t", initial_delay=10, period=10)
    assert timer.names == ["t"]

    assert timer.cancel("t") is True
    assert timer.cancel("t") is False
    await timer.shutdown()
    assert fired == []


@pytest.mark.asyncio
async def test_period_must_be_positive():
    timer = PeriodicTimer(on_fire=lambda name: asyncio.sleep(0))
    with pytest.raises(ValueError):
        timer.register("t", initial_delay=0, period=0)

from __future__ import annotations

import asyncio

import pytest

from sms_simulator.application.ports.clock import AsyncioScheduler, SystemClock


@pytest.mark.asyncio
async def test_asyncio_scheduler_runs_until_cancelled():
    ticks = 0

    async def callback() -> None:
        nonlocal ticks
        ticks += 1

    handle = AsyncioScheduler().call_every(0.01, callback)
    await asyncio.sleep(0.06)
    handle.cancel()
    seen = ticks
    await asyncio.sleep(0.03)

    assert seen >= 2
    assert ticks == seen


@pytest.mark.asyncio
async def test_asyncio_scheduler_survives_failing_callback():
    calls = 0

    async def callback() -> None:
        nonlocal calls
        calls += 1
        raise RuntimeError("boom")

    handle = AsyncioScheduler().call_every(0.01, callback)
    await asyncio.sleep(0.05)
    handle.cancel()

    assert calls >= 2


def test_system_clock_is_utc():
    assert SystemClock().now().tzinfo is not None

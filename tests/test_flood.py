"""Tests for the flood emission loop."""

from __future__ import annotations

import random

import pytest

from cforce.core.flood import FloodLoop
from cforce.core.reducer import AppendLine, Event
from cforce.settings import FloodConfig
from cforce.terminal.lines import LineKind


async def no_sleep(seconds: float) -> None:
    return None


@pytest.mark.asyncio
async def test_flood_runs_full_duration() -> None:
    emitted: list[Event] = []
    loop = FloodLoop(
        emitted.append,
        random.Random(3),
        config=FloodConfig(tick_ms=10, duration_ms=100, packets_per_tick=5),
        sleep=no_sleep,
    )

    assert await loop.run() is True

    assert loop.ticks == 10
    assert loop.packets == 50
    assert loop.elapsed_ms == 100
    assert len(emitted) == 11
    thread_lines = [e for e in emitted if isinstance(e, AppendLine) and e.text.startswith("[Thread ")]
    assert len(thread_lines) == 10
    assert emitted[-1] == AppendLine("[*] Time: 0s | Attacks: 50 | Rate: 50/s", LineKind.SYSTEM)


@pytest.mark.asyncio
async def test_stats_line_every_fifty_packets() -> None:
    emitted: list[Event] = []
    loop = FloodLoop(emitted.append, random.Random(0), sleep=no_sleep)

    await loop.run()

    stats = [e.text for e in emitted if isinstance(e, AppendLine) and e.text.startswith("[*] Time:")]
    # 100 ticks of 15 packets; every 10th tick lands on a multiple of 50
    assert loop.ticks == 100
    assert loop.packets == 1500
    assert len(stats) == 10
    assert stats[-1] == "[*] Time: 6s | Attacks: 1500 | Rate: 250/s"


@pytest.mark.asyncio
async def test_stop_before_run_emits_nothing() -> None:
    emitted: list[Event] = []
    loop = FloodLoop(emitted.append, random.Random(0), sleep=no_sleep)
    loop.stop()
    loop.stop()

    assert await loop.run() is False
    assert emitted == []
    assert loop.status()["stopped"] is True


@pytest.mark.asyncio
async def test_stop_during_sleep_suppresses_next_tick() -> None:
    emitted: list[Event] = []
    sleeps = 0

    async def stopping_sleep(seconds: float) -> None:
        nonlocal sleeps
        sleeps += 1
        if sleeps == 4:
            loop.stop()

    loop = FloodLoop(emitted.append, random.Random(0), sleep=stopping_sleep)

    assert await loop.run() is False
    assert loop.ticks == 3
    assert len(emitted) == 3
    assert loop.status() == {
        "ticks": 3,
        "packets": 45,
        "elapsed_ms": 180,
        "running": False,
        "stopped": True,
    }


@pytest.mark.asyncio
async def test_same_seed_same_output() -> None:
    first: list[Event] = []
    second: list[Event] = []
    config = FloodConfig(tick_ms=60, duration_ms=600)

    await FloodLoop(first.append, random.Random(42), config=config, sleep=no_sleep).run()
    await FloodLoop(second.append, random.Random(42), config=config, sleep=no_sleep).run()

    assert first == second


@pytest.mark.asyncio
async def test_tick_sleep_is_scaled() -> None:
    calls: list[float] = []

    async def recording_sleep(seconds: float) -> None:
        calls.append(seconds)

    loop = FloodLoop(
        lambda event: None,
        random.Random(0),
        config=FloodConfig(tick_ms=60, duration_ms=120),
        sleep=recording_sleep,
        time_scale=0.5,
    )
    await loop.run()

    assert calls == [0.03, 0.03]

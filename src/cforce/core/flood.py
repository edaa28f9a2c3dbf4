# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fixed-tick flood emission loop.

Runs until the simulated elapsed time reaches the configured duration or until
``stop()`` is called, whichever comes first. The stop flag is checked right
before every emission, so nothing is emitted once ``stop()`` has returned.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel

from cforce.core.reducer import AppendLine
from cforce.core.scripts import FLOOD_MESSAGES, FLOOD_TICK_KINDS
from cforce.settings import FloodConfig
from cforce.terminal.lines import LineKind

if TYPE_CHECKING:
    import random
    from collections.abc import Awaitable, Callable

    from cforce.core.reducer import Event

log = structlog.get_logger()

STATS_EVERY_PACKETS = 50


class FloodStatus(BaseModel):
    ticks: int
    packets: int
    elapsed_ms: int
    running: bool
    stopped: bool


class FloodLoop:
    def __init__(
        self,
        emit: Callable[[Event], None],
        rng: random.Random,
        *,
        config: FloodConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        time_scale: float = 1.0,
    ) -> None:
        self._emit = emit
        self._rng = rng
        self._config = config or FloodConfig()
        self._sleep = sleep
        self._time_scale = max(0.0, float(time_scale))
        self._stopped = False
        self._running = False
        self.ticks = 0
        self.packets = 0

    @property
    def elapsed_ms(self) -> int:
        return self.ticks * self._config.tick_ms

    @property
    def duration_s(self) -> float:
        return self._config.duration_ms / 1000.0

    @property
    def stopped(self) -> bool:
        return self._stopped

    def stop(self) -> None:
        """Halt emission. Idempotent."""
        if not self._stopped:
            log.info("flood_stop_requested", ticks=self.ticks, packets=self.packets)
        self._stopped = True

    async def run(self) -> bool:
        """Emit ticks until the duration elapses or ``stop()`` is called.

        Returns:
            True if the loop ran its full duration, False if it was stopped.
        """
        self._running = True
        tick_s = self._config.tick_ms * self._time_scale / 1000.0
        try:
            while not self._stopped and self.elapsed_ms < self._config.duration_ms:
                await self._sleep(tick_s)
                if self._stopped:
                    break
                self._tick()
        finally:
            self._running = False
        return not self._stopped

    def _tick(self) -> None:
        self.ticks += 1
        self.packets += self._config.packets_per_tick

        thread_id = self._rng.randint(1, 1000)
        kind = self._rng.choice(FLOOD_TICK_KINDS)
        message = self._rng.choice(FLOOD_MESSAGES).format(packets=self.packets)
        self._emit(AppendLine(f"[Thread {thread_id}] {message}", kind))

        if self.packets % STATS_EVERY_PACKETS == 0:
            elapsed_s = self.elapsed_ms // 1000
            rate = self.packets // (elapsed_s or 1)
            self._emit(
                AppendLine(
                    f"[*] Time: {elapsed_s}s | Attacks: {self.packets} | Rate: {rate}/s",
                    LineKind.SYSTEM,
                )
            )

    def status(self) -> dict[str, Any]:
        return FloodStatus(
            ticks=self.ticks,
            packets=self.packets,
            elapsed_ms=self.elapsed_ms,
            running=self._running,
            stopped=self._stopped,
        ).model_dump()

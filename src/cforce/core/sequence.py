# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Timed playback of scripted sequences."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cforce.core.reducer import AppendLine, Event
from cforce.terminal.lines import LineKind

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable


@dataclass(frozen=True)
class Step:
    """Apply *event* after waiting *delay_ms* since the previous step."""

    delay_ms: float
    event: Event


def line(delay_ms: float, text: str, kind: LineKind = LineKind.PLAIN) -> Step:
    return Step(delay_ms, AppendLine(text, kind))


class SequencePlayer:
    """Plays ``Step`` iterables in order through a single apply callback."""

    def __init__(
        self,
        apply: Callable[[Event], None],
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        time_scale: float = 1.0,
    ) -> None:
        self._apply = apply
        self._sleep = sleep
        self._time_scale = max(0.0, float(time_scale))

    @property
    def time_scale(self) -> float:
        return self._time_scale

    async def pause(self, delay_ms: float) -> None:
        """Wait *delay_ms* scaled by the time scale. Always yields to the loop."""
        await self._sleep(max(0.0, delay_ms) * self._time_scale / 1000.0)

    async def play(self, steps: Iterable[Step]) -> int:
        """Apply every step in authored order. Returns the number of steps applied."""
        applied = 0
        for step in steps:
            if step.delay_ms > 0:
                await self.pause(step.delay_ms)
            self._apply(step.event)
            applied += 1
        return applied

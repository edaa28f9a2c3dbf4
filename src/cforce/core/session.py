# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal session engine."""

from __future__ import annotations

import asyncio
import contextlib
import random
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from cforce.constants import (
    AUTO_EXPLOIT_MODULE,
    ESCALATING_COMMANDS,
    ESCALATION_DELAY_MS,
)
from cforce.core import scripts
from cforce.core.flood import FloodLoop
from cforce.core.handlers import resolve_handler, unknown_command_message
from cforce.core.reducer import (
    AppendLine,
    ClearScrollback,
    Event,
    SetBusy,
    SetContext,
    SetTarget,
    reduce,
)
from cforce.core.sequence import SequencePlayer
from cforce.core.state import Context, SessionState
from cforce.logging import get_logger
from cforce.settings import Settings
from cforce.terminal.lines import Line, LineKind
from cforce.terminal.parser import ParsedCommand, parse_command
from cforce.terminal.prompt import prompt_label
from cforce.terminal.targets import clean_target

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = get_logger(__name__)

Watcher = Callable[[Line | None], None]


class TerminalSession:
    """One simulated console: prompt context, scrollback and scripted sequences.

    All state changes go through ``apply``, which runs the pure reducer and
    notifies watchers. At most one scripted sequence runs at a time; while it
    (or a submitted command) runs, ``state.busy`` is true and ``submit`` is a
    no-op.

    Example:
        >>> async with TerminalSession(Settings(time_scale=0)) as term:
        ...     await term.submit("set RHOSTS 10.0.0.5")
        ...     term.state.target
        '10.0.0.5'
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        state: SessionState | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._rng = rng or random.Random(self._settings.seed)
        self._sleep = sleep
        self._state = state or SessionState.initial()
        self._player = SequencePlayer(self.apply, sleep=sleep, time_scale=self._settings.time_scale)
        self._task: asyncio.Task[None] | None = None
        self._flood: FloodLoop | None = None
        self._stopped_tasks: set[asyncio.Task[None]] = set()
        self._watchers: list[Watcher] = []
        self._closed = False

    async def __aenter__(self) -> TerminalSession:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ── State ──

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def flood(self) -> FloodLoop | None:
        """The flood loop of the running flood sequence, if any."""
        return self._flood

    def prompt_label(self) -> str:
        return prompt_label(self._state.context, self._state.active_module)

    def apply(self, event: Event) -> SessionState:
        """Apply *event* to the session state. The only state-update path."""
        previous = self._state
        self._state = reduce(previous, event)
        if previous.context is not self._state.context:
            logger.debug(
                "context_changed",
                old=previous.context.value,
                new=self._state.context.value,
                module=self._state.active_module,
            )
        self._notify(event)
        return self._state

    def write(self, text: str, kind: LineKind = LineKind.PLAIN) -> None:
        self.apply(AppendLine(text, kind))

    def write_all(self, lines: Iterable[tuple[str, LineKind]]) -> None:
        for text, kind in lines:
            self.apply(AppendLine(text, kind))

    async def pause(self, delay_ms: float) -> None:
        await self._player.pause(delay_ms)

    def clear(self) -> None:
        """Empty the scrollback. Context, module and target are untouched."""
        self.apply(ClearScrollback())

    def set_target(self, target: str | None) -> None:
        self.apply(SetTarget((target or "").strip() or None))

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ── Watchers ──

    def add_watch(self, callback: Watcher) -> None:
        """Call *callback* with every appended line, and with None on clear."""
        self._watchers.append(callback)

    def remove_watch(self, callback: Watcher) -> None:
        with contextlib.suppress(ValueError):
            self._watchers.remove(callback)

    def _notify(self, event: Event) -> None:
        if not self._watchers:
            return
        if isinstance(event, AppendLine):
            payload: Line | None = self._state.scrollback[-1]
        elif isinstance(event, ClearScrollback):
            payload = None
        else:
            return
        for watcher in list(self._watchers):
            try:
                watcher(payload)
            except Exception:
                logger.warning("watcher_failed", watcher=repr(watcher), exc_info=True)

    # ── Input ──

    async def submit(self, line: str) -> bool:
        """Run one typed line.

        Ignored (returns False) when the session is busy or closed, or when the
        line is blank. Never raises for command-level problems; those become
        error lines in the scrollback.
        """
        if self._closed or self._state.busy:
            logger.debug("submit_rejected", busy=self._state.busy, closed=self._closed)
            return False
        parsed = parse_command(line)
        if parsed is None:
            return False

        self.apply(SetBusy(True))
        try:
            await self._execute(parsed)
        finally:
            if not self.is_running():
                self.apply(SetBusy(False))
        return True

    async def _execute(self, parsed: ParsedCommand) -> None:
        self.write(f"{self.prompt_label()} {parsed.raw}", LineKind.INPUT)

        if self._state.context is Context.ROOT and parsed.name in ESCALATING_COMMANDS:
            self.write("[*] Starting Metasploit Framework...", LineKind.SYSTEM)
            await self.pause(ESCALATION_DELAY_MS)
            self.apply(SetContext(Context.FRAMEWORK))

        context = self._state.context
        handler = resolve_handler(context, parsed.kind)
        if handler is None:
            logger.debug("command_unknown", command=parsed.name, context=context.value)
            self.write(unknown_command_message(context, parsed.name), LineKind.ERROR)
            return

        logger.debug("command_dispatched", command=parsed.name, kind=parsed.kind.value, context=context.value)
        try:
            await handler(self, parsed)
        except Exception as exc:
            logger.exception("command_failed", command=parsed.name)
            self.write(f"[-] Internal error: {exc}", LineKind.ERROR)

    # ── Scripted sequences ──

    def _require_target(self, message: str = "Error: Set target first.") -> str | None:
        target = self._state.target
        if not target:
            self.write(message, LineKind.ERROR)
            return None
        return target

    def _launch(self, name: str, runner: Callable[[], Awaitable[Any]]) -> bool:
        if self.is_running():
            logger.warning("sequence_rejected", name=name, reason="already_running")
            return False
        self.apply(SetBusy(True))
        self._task = asyncio.create_task(self._run_sequence(name, runner), name=f"cforce-{name}")
        return True

    async def _run_sequence(self, name: str, runner: Callable[[], Awaitable[Any]]) -> None:
        logger.info("sequence_started", name=name, target=self._state.target)
        try:
            await runner()
        except asyncio.CancelledError:
            logger.info("sequence_cancelled", name=name)
            raise
        except Exception as exc:
            logger.exception("sequence_failed", name=name)
            self.write(f"[-] Internal error: {exc}", LineKind.ERROR)
        else:
            logger.info("sequence_finished", name=name)
        finally:
            if self._task is asyncio.current_task():
                self._task = None
                self._flood = None
                self.apply(SetBusy(False))

    def launch_scan(self) -> bool:
        target = self._require_target("Error: No target specified.")
        if target is None:
            return False
        return self._launch("scan", lambda: self._player.play(scripts.scan_steps(target)))

    def launch_brute_force(self) -> bool:
        target = self._require_target()
        if target is None:
            return False
        return self._launch("brute_force", lambda: self._player.play(scripts.brute_force_steps(target, self._rng)))

    def launch_ssh_brute_force(self) -> bool:
        target = self._require_target()
        if target is None:
            return False
        return self._launch(
            "ssh_brute_force",
            lambda: self._player.play(scripts.ssh_brute_force_steps(target, self._rng)),
        )

    def launch_flood(self) -> bool:
        target = self._require_target()
        if target is None:
            return False
        flood = FloodLoop(
            self.apply,
            self._rng,
            config=self._settings.flood,
            sleep=self._sleep,
            time_scale=self._settings.time_scale,
        )
        launched = self._launch("flood", lambda: self._run_flood(target, flood))
        if launched:
            self._flood = flood
        return launched

    async def _run_flood(self, target: str, flood: FloodLoop) -> None:
        await self._player.play(scripts.flood_preamble_steps(target, flood.duration_s))
        await self.pause(1000)
        if await flood.run():
            await self._player.play(scripts.flood_summary_steps(flood.packets, flood.duration_s))

    def launch_auto_exploit(self) -> bool:
        target = self._require_target()
        if target is None:
            return False
        return self._launch("auto_exploit", lambda: self._run_auto_exploit(clean_target(target)))

    async def _run_line(self, text: str) -> None:
        parsed = parse_command(text)
        if parsed is not None:
            await self._execute(parsed)

    async def _run_auto_exploit(self, host: str) -> None:
        if self._state.context is Context.ROOT:
            await self._run_line("msfconsole")
            await self.pause(1200)
        self.apply(SetContext(Context.FRAMEWORK))
        await self.pause(500)
        script = (
            (f"use {AUTO_EXPLOIT_MODULE}", 800),
            (f"set RHOSTS {host}", 800),
            ("check", 1500),
            ("run", 0),
        )
        for text, delay_ms in script:
            await self._run_line(text)
            if delay_ms:
                await self.pause(delay_ms)

    # ── Host actions (toolbar buttons) ──

    def _guard(self, action: str) -> bool:
        if self._closed or self._state.busy:
            logger.debug("action_rejected", action=action, busy=self._state.busy, closed=self._closed)
            return False
        return True

    def start_scan(self) -> bool:
        return self._guard("scan") and self.launch_scan()

    def start_brute_force(self) -> bool:
        return self._guard("brute_force") and self.launch_brute_force()

    def start_ssh_brute_force(self) -> bool:
        return self._guard("ssh_brute_force") and self.launch_ssh_brute_force()

    def start_flood(self) -> bool:
        return self._guard("flood") and self.launch_flood()

    def auto_exploit(self) -> bool:
        return self._guard("auto_exploit") and self.launch_auto_exploit()

    def stop(self) -> bool:
        """Interrupt the running sequence (the flood loop in particular).

        Nothing is appended by the interrupted sequence once this returns.
        """
        task = self._task
        if task is None or task.done():
            return False
        if self._flood is not None:
            self._flood.stop()
        self._task = None
        self._flood = None
        task.cancel()
        self._stopped_tasks.add(task)
        task.add_done_callback(self._stopped_tasks.discard)
        logger.info("sequence_stopped", name=task.get_name())
        self.write("[!] Attack interrupted by operator.", LineKind.WARNING)
        self.apply(SetBusy(False))
        return True

    async def wait_idle(self) -> None:
        """Wait until no scripted sequence is running."""
        while (task := self._task) is not None and not task.done():
            await asyncio.wait({task})

    async def close(self) -> None:
        """Tear the session down, cancelling and awaiting any running task."""
        self._closed = True
        if self._flood is not None:
            self._flood.stop()
        tasks = [t for t in (self._task, *self._stopped_tasks) if t is not None and not t.done()]
        self._task = None
        self._flood = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._stopped_tasks.clear()
        if self._state.busy:
            self.apply(SetBusy(False))
        logger.debug("session_closed", cancelled=len(tasks))

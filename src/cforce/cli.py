# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console

from cforce.core.session import TerminalSession
from cforce.logging import TranscriptRecorder, configure_logging
from cforce.logging.transcript import read_transcript
from cforce.paths import new_transcript_path
from cforce.render import LinePrinter, render_line
from cforce.settings import Settings
from cforce.terminal.targets import classify_target

console = Console()

# Console meta-commands (not part of the simulated shell)
META_HELP = (
    ":target <host>  set the operation target",
    ":scan           passive scan of the target",
    ":wpscan         web login brute force",
    ":hydra          SSH brute force",
    ":flood          flood simulation",
    ":autopwn        framework auto-exploit",
    ":stop           interrupt the running sequence",
    ":quit           leave the console",
)


def _build_settings(time_scale: float | None, seed: int | None) -> Settings:
    overrides: dict[str, Any] = {}
    if time_scale is not None:
        overrides["time_scale"] = time_scale
    if seed is not None:
        overrides["seed"] = seed
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--time-scale/--seed") from e


def _open_transcript(settings: Settings, transcript: str | None, record: bool) -> TranscriptRecorder | None:
    if transcript:
        return TranscriptRecorder(transcript)
    if record:
        return TranscriptRecorder(new_transcript_path(settings.transcript_root))
    return None


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """cforce scripted operations console."""


@cli.command("console")
@click.option("--target", default=None, help="Initial operation target.")
@click.option("--seed", type=int, default=None, help="Seed for jitter and flood output.")
@click.option("--time-scale", type=float, default=None, help="Multiplier for every scripted delay.")
@click.option("--transcript", type=click.Path(dir_okay=False), default=None, help="Write a JSONL transcript here.")
@click.option("--record/--no-record", default=False, show_default=True, help="Record a transcript under the transcript root.")
def console_cmd(
    target: str | None,
    seed: int | None,
    time_scale: float | None,
    transcript: str | None,
    record: bool,
) -> None:
    """Open the interactive console."""
    settings = _build_settings(time_scale, seed)
    configure_logging(settings)

    async def _run() -> None:
        recorder = _open_transcript(settings, transcript, record)
        async with TerminalSession(settings) as session:
            printer = LinePrinter(console)
            for line in session.state.scrollback:
                printer(line)
            session.add_watch(printer)
            if recorder is not None:
                recorder.attach(session)
            if target:
                session.set_target(target)
            try:
                await _repl(session)
            finally:
                if recorder is not None:
                    recorder.close()
                    console.print(f"[dim]transcript: {recorder.path}[/dim]")

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


async def _repl(session: TerminalSession) -> None:
    while True:
        try:
            text = await asyncio.to_thread(console.input, f"{session.prompt_label()} ")
        except (EOFError, KeyboardInterrupt):
            return
        text = text.strip()
        if not text:
            continue
        if text.startswith(":"):
            if not _meta(session, text):
                return
            continue
        if session.state.busy:
            console.print("[yellow](busy - type :stop to interrupt)[/yellow]")
            continue
        await session.submit(text)


def _meta(session: TerminalSession, text: str) -> bool:
    """Run a console meta-command. Returns False when the console should exit."""
    name, _, arg = text[1:].partition(" ")
    match name.lower():
        case "quit" | "q":
            return False
        case "target":
            session.set_target(arg)
            console.print(f"[cyan]target => {session.state.target or '(none)'}[/cyan]")
        case "scan":
            session.start_scan()
        case "wpscan":
            session.start_brute_force()
        case "hydra":
            session.start_ssh_brute_force()
        case "flood":
            session.start_flood()
        case "autopwn":
            session.auto_exploit()
        case "stop":
            if not session.stop():
                console.print("[yellow]nothing to stop[/yellow]")
        case _:
            for entry in META_HELP:
                console.print(entry, highlight=False)
    return True


@cli.command("run")
@click.argument("commands", nargs=-1, required=True)
@click.option("--target", default=None, help="Initial operation target.")
@click.option("--seed", type=int, default=None, help="Seed for jitter and flood output.")
@click.option("--time-scale", type=float, default=None, help="Multiplier for every scripted delay.")
@click.option("--transcript", type=click.Path(dir_okay=False), default=None, help="Write a JSONL transcript here.")
def run_cmd(
    commands: tuple[str, ...],
    target: str | None,
    seed: int | None,
    time_scale: float | None,
    transcript: str | None,
) -> None:
    """Submit COMMANDS in order, waiting for each sequence, then print the scrollback."""
    settings = _build_settings(time_scale, seed)
    configure_logging(settings)

    async def _run() -> list[Any]:
        recorder = _open_transcript(settings, transcript, record=False)
        async with TerminalSession(settings) as session:
            if recorder is not None:
                recorder.attach(session)
            if target:
                session.set_target(target)
            try:
                for command in commands:
                    await session.submit(command)
                    await session.wait_idle()
            finally:
                if recorder is not None:
                    recorder.close()
            return list(session.state.scrollback)

    for line in asyncio.run(_run()):
        console.print(render_line(line), highlight=False, soft_wrap=True)


@cli.command("classify")
@click.argument("targets", nargs=-1, required=True)
def classify_cmd(targets: tuple[str, ...]) -> None:
    """Print how each target is classified (vulnerable or hardened)."""
    for target in targets:
        click.echo(f"{target}\t{classify_target(target).value}")


@cli.command("replay")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def replay_cmd(path: Path) -> None:
    """Print the final scrollback recorded in a transcript file."""
    for line in read_transcript(path):
        console.print(render_line(line), highlight=False, soft_wrap=True)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

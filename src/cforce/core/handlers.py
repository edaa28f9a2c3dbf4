# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-context command tables.

Each table maps a ``CommandKind`` to an async handler taking the session and
the parsed command. Commands missing from the active context's table fall
through to that context's unknown-command line.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from cforce.constants import (
    CHECK_DELAY_MS,
    DEFAULT_PAYLOAD,
    EXPLOIT_DELAY_MS,
    HASHDUMP_DELAY_MS,
    LISTEN_HOST,
    LISTEN_PORT,
    SESSION_ID,
)
from cforce.core import scripts
from cforce.core.reducer import ClearScrollback, OpenSession, SelectModule, SetContext, SetTarget
from cforce.core.state import Context
from cforce.terminal.lines import LineKind
from cforce.terminal.parser import CommandKind, ParsedCommand
from cforce.terminal.targets import is_vulnerable

if TYPE_CHECKING:
    from cforce.core.session import TerminalSession

Handler = Callable[["TerminalSession", ParsedCommand], Awaitable[None]]

ERR = LineKind.ERROR
WARN = LineKind.WARNING
SYS = LineKind.SYSTEM


# ── Global ──


async def _clear(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.apply(ClearScrollback())


async def _exit(session: TerminalSession, cmd: ParsedCommand) -> None:
    match session.state.context:
        case Context.INTERACTIVE:
            session.write("[*] Shutting down Meterpreter session...", SYS)
            session.apply(SetContext(Context.FRAMEWORK))
        case Context.MODULE:
            session.apply(SetContext(Context.FRAMEWORK))
        case Context.FRAMEWORK:
            session.apply(SetContext(Context.ROOT))
        case Context.ROOT:
            session.write("Logout", SYS)


async def _back(session: TerminalSession, cmd: ParsedCommand) -> None:
    match session.state.context:
        case Context.INTERACTIVE:
            session.apply(SetContext(Context.FRAMEWORK))
            session.write("[*] Backgrounding session...", WARN)
        case Context.MODULE:
            session.apply(SetContext(Context.FRAMEWORK))
        case Context.FRAMEWORK:
            session.apply(SetContext(Context.ROOT))
        case Context.ROOT:
            session.write("Already at root level.", WARN)


GLOBAL_COMMANDS: dict[CommandKind, Handler] = {
    CommandKind.CLEAR: _clear,
    CommandKind.EXIT: _exit,
    CommandKind.BACK: _back,
}


# ── Root shell ──


def _adopt_target(session: TerminalSession, cmd: ParsedCommand) -> None:
    if cmd.arg(0):
        session.apply(SetTarget(cmd.arg(0)))


async def _root_help(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write_all(scripts.ROOT_HELP)


async def _scan(session: TerminalSession, cmd: ParsedCommand) -> None:
    _adopt_target(session, cmd)
    session.launch_scan()


async def _msfconsole(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write_all(scripts.FRAMEWORK_LAUNCH)
    session.apply(SetContext(Context.FRAMEWORK))


async def _wpscan(session: TerminalSession, cmd: ParsedCommand) -> None:
    _adopt_target(session, cmd)
    session.launch_brute_force()


async def _hydra(session: TerminalSession, cmd: ParsedCommand) -> None:
    _adopt_target(session, cmd)
    session.launch_ssh_brute_force()


async def _flood(session: TerminalSession, cmd: ParsedCommand) -> None:
    _adopt_target(session, cmd)
    session.launch_flood()


ROOT_COMMANDS: dict[CommandKind, Handler] = {
    CommandKind.HELP: _root_help,
    CommandKind.SCAN: _scan,
    CommandKind.MSFCONSOLE: _msfconsole,
    CommandKind.WPSCAN: _wpscan,
    CommandKind.HYDRA: _hydra,
    CommandKind.FLOOD: _flood,
}


# ── Framework and module console ──


async def _framework_help(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write_all(scripts.FRAMEWORK_HELP)


async def _search(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write(f"Matching Modules ({cmd.arg(0) or 'all'}):", SYS)
    session.write_all(scripts.SEARCH_RESULTS)


async def _use(session: TerminalSession, cmd: ParsedCommand) -> None:
    module = cmd.arg(0)
    if not module:
        session.write("Usage: use <module_name>", ERR)
        return
    session.apply(SelectModule(module))
    session.write(f"[*] Using configured payload {DEFAULT_PAYLOAD}")


async def _show(session: TerminalSession, cmd: ParsedCommand) -> None:
    match cmd.arg(0):
        case "payloads":
            session.write_all(scripts.PAYLOADS)
        case "options":
            session.write_all(scripts.module_options(session.state.target))
        case _:
            session.write("Usage: show [payloads|options|targets]", WARN)


async def _set(session: TerminalSession, cmd: ParsedCommand) -> None:
    option, value = cmd.arg(0), cmd.arg(1)
    if not option or not value:
        session.write("Usage: set <option> <value>", ERR)
        return
    option = option.upper()
    if option == "RHOSTS":
        session.apply(SetTarget(value))
    session.write(f"{option} => {value}")


def _require_module_and_target(session: TerminalSession) -> str | None:
    state = session.state
    if state.context is not Context.MODULE:
        session.write("[-] No module selected.", ERR)
        return None
    if not state.target:
        session.write("[-] RHOSTS not set.", ERR)
        return None
    return state.target


async def _check(session: TerminalSession, cmd: ParsedCommand) -> None:
    target = _require_module_and_target(session)
    if target is None:
        return
    session.write(f"[*] Validating target {target}...")
    await session.pause(CHECK_DELAY_MS)
    if is_vulnerable(target):
        session.write(f"[+] {target}:80 - The target is vulnerable.", LineKind.SUCCESS)
    else:
        session.write(f"[-] {target}:80 - The target is NOT vulnerable.", ERR)


async def _exploit(session: TerminalSession, cmd: ParsedCommand) -> None:
    target = _require_module_and_target(session)
    if target is None:
        return
    session.write(f"[*] Started reverse TCP handler on {LISTEN_HOST}:{LISTEN_PORT}")
    session.write(f"[*] Sending stage (12901 bytes) to {target}")
    await session.pause(EXPLOIT_DELAY_MS)
    if is_vulnerable(target):
        session.apply(OpenSession())
        session.write(
            f"[+] Meterpreter session {SESSION_ID} opened ({LISTEN_HOST}:{LISTEN_PORT} -> {target}:56732)",
            LineKind.SUCCESS,
        )
    else:
        session.write("[-] Exploit failed: Connection timed out. Target may be patched or behind WAF.", ERR)
        session.write("[*] Exploit completed, but no session was created.", SYS)


async def _sessions(session: TerminalSession, cmd: ParsedCommand) -> None:
    flag = cmd.arg(0)
    if flag == "-i":
        session_id = cmd.arg(1) or ""
        if session_id == SESSION_ID:
            session.write(f"[*] Starting interaction with {SESSION_ID}...")
            session.apply(SetContext(Context.INTERACTIVE))
        else:
            session.write(f"[-] Error: No session with ID {session_id}", ERR)
    elif flag == "-l" or flag is None:
        session.write_all(scripts.SESSIONS_HEADER)
        state = session.state
        if state.session_opened and state.target:
            session.write(scripts.session_row(state.target))
        else:
            session.write("  No active sessions.")
    else:
        session.write("Usage: sessions -i <id> OR sessions -l", ERR)


FRAMEWORK_COMMANDS: dict[CommandKind, Handler] = {
    CommandKind.HELP: _framework_help,
    CommandKind.SEARCH: _search,
    CommandKind.USE: _use,
    CommandKind.SHOW: _show,
    CommandKind.SET: _set,
    CommandKind.CHECK: _check,
    CommandKind.EXPLOIT: _exploit,
    CommandKind.SESSIONS: _sessions,
}


# ── Interactive session ──


async def _interactive_help(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write_all(scripts.INTERACTIVE_HELP)


async def _sysinfo(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write_all(scripts.SYSINFO)


async def _getuid(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write("Server username: root", LineKind.SUCCESS)


async def _hashdump(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write("[*] Dumping password hashes...", WARN)
    await session.pause(HASHDUMP_DELAY_MS)
    session.write(scripts.HASHDUMP_LINE)


async def _shell(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.write_all(scripts.SHELL_DROP)


async def _background(session: TerminalSession, cmd: ParsedCommand) -> None:
    session.apply(SetContext(Context.FRAMEWORK))
    session.write(f"Backgrounding session {SESSION_ID}...", WARN)


INTERACTIVE_COMMANDS: dict[CommandKind, Handler] = {
    CommandKind.HELP: _interactive_help,
    CommandKind.SYSINFO: _sysinfo,
    CommandKind.GETUID: _getuid,
    CommandKind.HASHDUMP: _hashdump,
    CommandKind.SHELL: _shell,
    CommandKind.BACKGROUND: _background,
}


COMMAND_TABLES: dict[Context, dict[CommandKind, Handler]] = {
    Context.ROOT: ROOT_COMMANDS,
    Context.FRAMEWORK: FRAMEWORK_COMMANDS,
    Context.MODULE: FRAMEWORK_COMMANDS,
    Context.INTERACTIVE: INTERACTIVE_COMMANDS,
}


def resolve_handler(context: Context, kind: CommandKind) -> Handler | None:
    """Return the handler for *kind* in *context*; global commands win."""
    if kind in GLOBAL_COMMANDS:
        return GLOBAL_COMMANDS[kind]
    return COMMAND_TABLES[context].get(kind)


def unknown_command_message(context: Context, name: str) -> str:
    if context is Context.ROOT:
        return f"bash: {name}: command not found"
    return f"[-] Unknown command: {name}"

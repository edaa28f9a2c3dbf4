# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Command-line parsing.

A submitted line is split on whitespace. The first word, lowercased, is the
command name; it is resolved once to a ``CommandKind`` so dispatch tables never
compare raw strings. Aliases (``exit``/``quit``, ``exploit``/``run``, the flood
launchers) collapse to one kind.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class CommandKind(StrEnum):
    # Global
    CLEAR = "clear"
    EXIT = "exit"
    BACK = "back"
    HELP = "help"
    # Root shell
    SCAN = "scan"
    MSFCONSOLE = "msfconsole"
    WPSCAN = "wpscan"
    HYDRA = "hydra"
    FLOOD = "flood"
    # Framework console
    SEARCH = "search"
    USE = "use"
    SHOW = "show"
    SET = "set"
    CHECK = "check"
    EXPLOIT = "exploit"
    SESSIONS = "sessions"
    # Interactive session
    SYSINFO = "sysinfo"
    GETUID = "getuid"
    HASHDUMP = "hashdump"
    SHELL = "shell"
    BACKGROUND = "background"

    UNKNOWN = "unknown"


_ALIASES: dict[str, CommandKind] = {
    "quit": CommandKind.EXIT,
    "run": CommandKind.EXPLOIT,
    "hping3": CommandKind.FLOOD,
    "ddos": CommandKind.FLOOD,
    "exados": CommandKind.FLOOD,
}


class ParsedCommand(BaseModel):
    """One submitted line, split and resolved."""

    raw: str
    name: str
    args: tuple[str, ...] = ()
    kind: CommandKind = CommandKind.UNKNOWN

    model_config = ConfigDict(frozen=True)

    def arg(self, index: int) -> str | None:
        """Return positional argument *index*, or None when absent."""
        if index < len(self.args):
            return self.args[index]
        return None


def resolve_kind(name: str) -> CommandKind:
    """Map a lowercased command name to its kind (UNKNOWN when unrecognized)."""
    if name in _ALIASES:
        return _ALIASES[name]
    if name == CommandKind.UNKNOWN.value or name == CommandKind.FLOOD.value:
        return CommandKind.UNKNOWN
    try:
        return CommandKind(name)
    except ValueError:
        return CommandKind.UNKNOWN


def parse_command(line: str) -> ParsedCommand | None:
    """Parse a submitted line. Returns None for empty or whitespace-only input."""
    raw = line.strip()
    if not raw:
        return None
    words = raw.split()
    name = words[0].lower()
    return ParsedCommand(raw=raw, name=name, args=tuple(words[1:]), kind=resolve_kind(name))

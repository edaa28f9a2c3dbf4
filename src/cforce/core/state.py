# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal session state."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from cforce.constants import GREETING_HINT, GREETING_NOTICE, GREETING_TITLE
from cforce.terminal.lines import Line, LineKind

Severity = Literal["CRITICAL", "HIGH", "MEDIUM", "LOW", "INFO"]
Category = Literal["MISCONFIG", "EXPOSED", "OUTDATED", "SSL", "CVE", "INFO_DISC"]


class Context(StrEnum):
    """Command-interpretation mode of the terminal."""

    ROOT = "root"  # Plain root shell
    FRAMEWORK = "framework"  # Exploitation framework console
    MODULE = "module"  # Framework console with a module selected
    INTERACTIVE = "interactive"  # Post-exploitation session


class Finding(BaseModel):
    id: str
    title: str
    severity: Severity
    cvss: float
    component: str
    description: str
    category: Category
    method: str

    model_config = ConfigDict(frozen=True)


class SessionState(BaseModel):
    """Immutable snapshot of one terminal session.

    Never mutated in place; ``cforce.core.reducer.reduce`` returns a new value.
    """

    context: Context = Context.ROOT
    active_module: str | None = None
    target: str | None = None
    scrollback: tuple[Line, ...] = ()
    busy: bool = False
    findings: tuple[Finding, ...] = ()
    scan_complete: bool = False
    session_opened: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def initial(cls) -> SessionState:
        """State at view mount: ROOT context plus the greeting banner."""
        return cls(
            scrollback=(
                Line(text=GREETING_TITLE, kind=LineKind.SYSTEM),
                Line(text=GREETING_NOTICE, kind=LineKind.WARNING),
                Line(text=GREETING_HINT, kind=LineKind.SYSTEM),
            )
        )

    def lines_of(self, kind: LineKind) -> list[Line]:
        return [line for line in self.scrollback if line.kind is kind]

    def texts(self) -> list[str]:
        return [line.text for line in self.scrollback]

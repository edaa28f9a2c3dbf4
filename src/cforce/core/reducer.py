# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Session events and the pure state transition function.

Every change to a ``SessionState`` is expressed as one of the events below and
applied with ``reduce``. The reducer owns the module invariant: leaving the
MODULE context always clears ``active_module``.
"""

from __future__ import annotations

from dataclasses import dataclass

from cforce.core.state import Context, Finding, SessionState
from cforce.terminal.lines import Line, LineKind


@dataclass(frozen=True)
class AppendLine:
    text: str
    kind: LineKind = LineKind.PLAIN


@dataclass(frozen=True)
class ClearScrollback:
    pass


@dataclass(frozen=True)
class SetContext:
    context: Context


@dataclass(frozen=True)
class SelectModule:
    module: str


@dataclass(frozen=True)
class SetTarget:
    target: str | None


@dataclass(frozen=True)
class SetBusy:
    busy: bool


@dataclass(frozen=True)
class StartScan:
    pass


@dataclass(frozen=True)
class CompleteScan:
    findings: tuple[Finding, ...]


@dataclass(frozen=True)
class OpenSession:
    pass


Event = (
    AppendLine
    | ClearScrollback
    | SetContext
    | SelectModule
    | SetTarget
    | SetBusy
    | StartScan
    | CompleteScan
    | OpenSession
)


def reduce(state: SessionState, event: Event) -> SessionState:
    """Return the state that results from applying *event* to *state*."""
    match event:
        case AppendLine(text=text, kind=kind):
            return state.model_copy(update={"scrollback": (*state.scrollback, Line(text=text, kind=kind))})
        case ClearScrollback():
            return state.model_copy(update={"scrollback": ()})
        case SetContext(context=context):
            module = state.active_module if context is Context.MODULE else None
            return state.model_copy(update={"context": context, "active_module": module})
        case SelectModule(module=module):
            return state.model_copy(update={"context": Context.MODULE, "active_module": module})
        case SetTarget(target=target):
            return state.model_copy(update={"target": target or None})
        case SetBusy(busy=busy):
            return state.model_copy(update={"busy": busy})
        case StartScan():
            return state.model_copy(update={"findings": (), "scan_complete": False})
        case CompleteScan(findings=findings):
            return state.model_copy(update={"findings": findings, "scan_complete": True})
        case OpenSession():
            return state.model_copy(update={"session_opened": True})
    raise TypeError(f"Unknown session event: {event!r}")

"""Tests for the session state reducer."""

from __future__ import annotations

import pytest

from cforce.core.reducer import (
    AppendLine,
    ClearScrollback,
    CompleteScan,
    OpenSession,
    SelectModule,
    SetBusy,
    SetContext,
    SetTarget,
    StartScan,
    reduce,
)
from cforce.core.scripts import FINDINGS
from cforce.core.state import Context, SessionState
from cforce.terminal.lines import LineKind


def test_initial_state_has_greeting() -> None:
    state = SessionState.initial()

    assert state.context is Context.ROOT
    assert state.active_module is None
    assert state.target is None
    assert not state.busy
    assert len(state.scrollback) == 3
    assert state.lines_of(LineKind.ERROR) == []
    assert state.lines_of(LineKind.SUCCESS) == []


def test_append_returns_new_state() -> None:
    state = SessionState()
    new = reduce(state, AppendLine("hello", LineKind.SUCCESS))

    assert state.scrollback == ()
    assert new.texts() == ["hello"]
    assert new.scrollback[0].kind is LineKind.SUCCESS


def test_clear_keeps_everything_but_scrollback() -> None:
    state = SessionState(
        context=Context.MODULE,
        active_module="exploit/x",
        target="demo.local",
        scrollback=SessionState.initial().scrollback,
    )
    new = reduce(state, ClearScrollback())

    assert new.scrollback == ()
    assert new.context is Context.MODULE
    assert new.active_module == "exploit/x"
    assert new.target == "demo.local"


def test_select_module_enters_module_context() -> None:
    new = reduce(SessionState(context=Context.FRAMEWORK), SelectModule("exploit/y"))

    assert new.context is Context.MODULE
    assert new.active_module == "exploit/y"


@pytest.mark.parametrize("context", [Context.ROOT, Context.FRAMEWORK, Context.INTERACTIVE])
def test_leaving_module_clears_active_module(context: Context) -> None:
    state = SessionState(context=Context.MODULE, active_module="exploit/x")

    new = reduce(state, SetContext(context))

    assert new.context is context
    assert new.active_module is None


def test_set_context_module_keeps_module() -> None:
    state = SessionState(context=Context.MODULE, active_module="exploit/x")

    assert reduce(state, SetContext(Context.MODULE)).active_module == "exploit/x"


def test_empty_target_is_stored_as_none() -> None:
    state = reduce(SessionState(), SetTarget("demo.local"))
    assert state.target == "demo.local"
    assert reduce(state, SetTarget("")).target is None


def test_scan_events_track_findings() -> None:
    state = reduce(SessionState(), CompleteScan(FINDINGS))
    assert state.scan_complete
    assert [f.id for f in state.findings] == ["V-102", "V-205", "V-310", "V-401"]

    restarted = reduce(state, StartScan())
    assert restarted.findings == ()
    assert not restarted.scan_complete


def test_busy_and_session_flags() -> None:
    state = reduce(reduce(SessionState(), SetBusy(True)), OpenSession())

    assert state.busy
    assert state.session_opened


def test_unknown_event_raises() -> None:
    with pytest.raises(TypeError):
        reduce(SessionState(), object())  # type: ignore[arg-type]

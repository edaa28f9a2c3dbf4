"""Tests for scripted sequences: scan, brute force, flood and auto-exploit."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from cforce.constants import AUTO_EXPLOIT_MODULE
from cforce.core.scripts import FLOOD_BANNER
from cforce.core.session import TerminalSession
from cforce.core.state import Context, SessionState
from cforce.terminal.lines import LineKind

MakeSession = Callable[..., TerminalSession]

INTERRUPTED = "[!] Attack interrupted by operator."


async def _spin_until(predicate: Callable[[], bool], limit: int = 10_000) -> None:
    for _ in range(limit):
        if predicate():
            return
        await asyncio.sleep(0)
    pytest.fail("condition never became true")


async def _spin(times: int = 200) -> None:
    for _ in range(times):
        await asyncio.sleep(0)


def _sequence_tasks() -> list[asyncio.Task]:
    return [task for task in asyncio.all_tasks() if task.get_name().startswith("cforce-")]


# ── Passive scan ──


@pytest.mark.asyncio
async def test_scan_runs_to_completion(make_session: MakeSession) -> None:
    async with make_session() as term:
        assert await term.submit("scan demo.local") is True
        assert term.state.busy
        assert term.is_running()
        # Input is ignored while the sequence owns the terminal
        assert await term.submit("help") is False

        await term.wait_idle()

        state = term.state
        assert not state.busy
        assert state.target == "demo.local"
        assert state.scan_complete
        assert [f.severity for f in state.findings] == ["CRITICAL", "HIGH", "HIGH", "MEDIUM"]
        assert "[*] Starting passive scan on demo.local" in state.texts()
        assert state.scrollback[-1].text == "[*] Scan finished. Report generated."
        assert state.scrollback[-1].kind is LineKind.SUCCESS


@pytest.mark.asyncio
async def test_scan_without_target(make_session: MakeSession) -> None:
    async with make_session() as term:
        await term.submit("scan")

        assert term.state.texts()[-1] == "Error: No target specified."
        assert not term.state.busy
        assert not term.is_running()


# ── Brute force ──


@pytest.mark.asyncio
async def test_brute_force_hardened_target(make_session: MakeSession) -> None:
    """A hardened target exhausts the wordlist without a single success line."""
    state = SessionState(context=Context.MODULE, active_module="exploit/x", target="example.com")
    async with make_session(state) as term:
        assert term.start_brute_force() is True
        await term.wait_idle()

        assert term.state.context is Context.ROOT
        assert term.state.active_module is None
        assert term.state.lines_of(LineKind.SUCCESS) == []
        failures = [t for t in term.state.texts() if t.startswith("[ATTEMPT] example : ")]
        assert len(failures) == 6
        assert term.state.texts().count("[!] Reached end of wordlist. No valid credentials found.") == 1
        assert not term.state.busy


@pytest.mark.asyncio
async def test_brute_force_vulnerable_target(make_session: MakeSession) -> None:
    async with make_session() as term:
        await term.submit("wpscan test.local")
        await term.wait_idle()

        successes = term.state.lines_of(LineKind.SUCCESS)
        assert [line.text for line in successes] == [
            "[SUCCESS] Password found! | Username: test | Password: P@ssw0rd123"
        ]
        assert term.state.scrollback[-1] == successes[0]
        assert term.state.texts()[-4:-1] == [
            "[ATTEMPT] test : 123456 ... Failed",
            "[ATTEMPT] test : password ... Failed",
            "[ATTEMPT] test : test123 ... Failed",
        ]


@pytest.mark.asyncio
async def test_brute_force_requires_target(make_session: MakeSession) -> None:
    async with make_session() as term:
        assert term.start_brute_force() is False

        assert term.state.scrollback[-1].text == "Error: Set target first."
        assert term.state.scrollback[-1].kind is LineKind.ERROR
        assert not term.state.busy


@pytest.mark.asyncio
async def test_ssh_brute_force_hardened_target(make_session: MakeSession) -> None:
    async with make_session() as term:
        term.set_target("example.com")
        assert term.start_ssh_brute_force() is True
        await term.wait_idle()

        texts = term.state.texts()
        assert sum(1 for t in texts if t.endswith("... failed")) == 6
        assert texts[-1] == "[DATA] 0 valid passwords found"
        assert term.state.lines_of(LineKind.SUCCESS) == []


@pytest.mark.asyncio
async def test_ssh_brute_force_vulnerable_target(make_session: MakeSession) -> None:
    async with make_session() as term:
        await term.submit("hydra 10.0.0.7")
        await term.wait_idle()

        texts = term.state.texts()
        assert sum(1 for t in texts if t.endswith("... failed")) == 5
        assert texts[-2:] == [
            "[22][ssh] host: 10.0.0.7   login: root   password: master",
            "[STATUS] attack finished: 1 valid password found",
        ]


# ── Flood ──


@pytest.mark.asyncio
async def test_flood_completes_with_summary(make_session: MakeSession) -> None:
    async with make_session() as term:
        await term.submit("ddos demo.local")
        await term.wait_idle()

        state = term.state
        # Earlier output survives; the banner follows the echoed command
        assert state.texts()[:3] == [line.text for line in SessionState.initial().scrollback]
        assert "root@cforce:~# python3 exados.py" in state.texts()
        assert FLOOD_BANNER in state.texts()
        assert state.texts().index(FLOOD_BANNER) > state.texts().index("root@cforce:~# ddos demo.local")
        assert "[+] Target: http://demo.local" in state.texts()
        assert "[+] SUPER Attack finished. Total requests: 1500" in state.texts()
        assert "[+] Attack power: 250.00 requests/second" in state.texts()
        assert sum(1 for t in state.texts() if t.startswith("[Thread ")) == 100
        assert not state.busy
        assert term.flood is None


@pytest.mark.asyncio
async def test_flood_stop_is_final(make_session: MakeSession) -> None:
    """Nothing is appended after the operator stops the flood."""
    async with make_session() as term:
        term.set_target("demo.local")
        assert term.start_flood() is True
        await _spin_until(lambda: term.flood is not None and term.flood.ticks >= 5)
        flood = term.flood

        assert term.stop() is True

        frozen = term.state.scrollback
        assert frozen[-1].text == INTERRUPTED
        assert frozen[-1].kind is LineKind.WARNING
        assert not term.state.busy
        assert flood is not None and flood.stopped
        assert not term.is_running()

        await _spin()
        await asyncio.sleep(0.01)

        assert term.state.scrollback == frozen
        assert "[+] Attack duration completed. Stopping threads..." not in term.state.texts()
        assert _sequence_tasks() == []


@pytest.mark.asyncio
async def test_stop_interrupts_scan(make_session: MakeSession) -> None:
    async with make_session() as term:
        term.set_target("demo.local")
        assert term.start_scan() is True
        assert term.stop() is True

        await _spin()

        assert term.state.texts()[-1] == INTERRUPTED
        assert not term.state.scan_complete
        assert not term.state.busy


@pytest.mark.asyncio
async def test_stop_when_idle(make_session: MakeSession) -> None:
    async with make_session() as term:
        before = term.state

        assert term.stop() is False
        assert term.state == before


@pytest.mark.asyncio
async def test_one_sequence_at_a_time(make_session: MakeSession) -> None:
    async with make_session() as term:
        term.set_target("demo.local")
        assert term.start_flood() is True

        assert term.start_scan() is False
        assert term.auto_exploit() is False
        assert await term.submit("scan") is False

        term.stop()
        await _spin()
        assert term.start_scan() is True
        await term.wait_idle()
        assert term.state.scan_complete


@pytest.mark.asyncio
async def test_close_cancels_running_flood(make_session: MakeSession) -> None:
    term = make_session()
    term.set_target("demo.local")
    term.start_flood()
    await _spin_until(lambda: term.flood is not None and term.flood.ticks >= 2)

    await term.close()

    assert _sequence_tasks() == []
    assert not term.state.busy
    assert not term.is_running()


@pytest.mark.asyncio
async def test_same_seed_same_flood_output(make_session: MakeSession) -> None:
    runs = []
    for _ in range(2):
        async with make_session() as term:
            await term.submit("hping3 demo.local")
            await term.wait_idle()
            runs.append(term.state.scrollback)

    assert runs[0] == runs[1]


# ── Auto-exploit ──


@pytest.mark.asyncio
async def test_auto_exploit_opens_session(make_session: MakeSession) -> None:
    async with make_session() as term:
        term.set_target("http://demo.local/")
        assert term.auto_exploit() is True
        await term.wait_idle()

        state = term.state
        texts = state.texts()
        assert state.context is Context.MODULE
        assert state.active_module == AUTO_EXPLOIT_MODULE
        assert state.target == "demo.local"
        assert state.session_opened
        assert "root@cforce:~# msfconsole" in texts
        assert "RHOSTS => demo.local" in texts
        assert "[+] demo.local:80 - The target is vulnerable." in texts
        assert "Meterpreter session 1 opened" in texts[-1]
        assert not state.busy


@pytest.mark.asyncio
async def test_auto_exploit_from_framework_skips_msfconsole(make_session: MakeSession) -> None:
    async with make_session(SessionState(context=Context.FRAMEWORK, target="example.com")) as term:
        term.auto_exploit()
        await term.wait_idle()

        texts = term.state.texts()
        assert not any(t.endswith("msfconsole") for t in texts)
        assert "[-] example.com:80 - The target is NOT vulnerable." in texts
        assert texts[-1] == "[*] Exploit completed, but no session was created."
        assert not term.state.session_opened


@pytest.mark.asyncio
async def test_auto_exploit_requires_target(make_session: MakeSession) -> None:
    async with make_session() as term:
        assert term.auto_exploit() is False
        assert term.state.texts()[-1] == "Error: Set target first."

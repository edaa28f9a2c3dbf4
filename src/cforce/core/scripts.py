# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Canned console content and scripted sequences.

Everything a command prints lives here as data. Timed sequences are returned as
``Step`` lists (or generators, when jitter or early exit is involved) and are
played back by ``cforce.core.sequence.SequencePlayer``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cforce.constants import DEFAULT_PAYLOAD, LISTEN_HOST, LISTEN_PORT, ROOT_PROMPT
from cforce.core.reducer import CompleteScan, SetContext, StartScan
from cforce.core.sequence import Step, line
from cforce.core.state import Context, Finding
from cforce.terminal.lines import LineKind
from cforce.terminal.targets import clean_target, guess_username, is_vulnerable

if TYPE_CHECKING:
    import random
    from collections.abc import Iterator

Output = tuple[tuple[str, LineKind], ...]

P = LineKind.PLAIN
S = LineKind.SYSTEM

RULE = "=" * 60

# ── Help tables ──

ROOT_HELP: Output = (
    ("Available Commands (ROOT):", S),
    ("  scan <target>    : Start passive vulnerability scan", P),
    ("  msfconsole       : Launch Metasploit Framework", P),
    ("  wpscan <target>  : Start WPScan enumeration", P),
    ("  hydra <target>   : Start SSH Brute Force", P),
    ("  python3 exados.py: Start EXADOS SUPER DDoS (alias: exados, ddos, hping3)", P),
)

FRAMEWORK_HELP: Output = (
    ("Core Commands:", S),
    ("  use <module>     : Select an exploit module", P),
    ("  search <term>    : Search for modules", P),
    ("  sessions -i <id> : Interact with a session", P),
    ("  show <type>      : Show info (payloads, options, targets)", P),
    ("  set <opt> <val>  : Set a context variable", P),
    ("  check            : Check if target is vulnerable", P),
    ("  exploit / run    : Launch the attack", P),
)

INTERACTIVE_HELP: Output = (
    ("Meterpreter Commands:", S),
    ("  sysinfo   : Get system information", P),
    ("  getuid    : Get user ID", P),
    ("  hashdump  : Dump SAM database", P),
    ("  shell     : Drop into system shell", P),
    ("  background: Background current session", P),
)

# ── Framework console ──

FRAMEWORK_BANNER = r"""
     ,           ,
    /             \
   ((__-^^-,-^^-__))
    `-_---' `---_-'
     `--|o` 'o|--'
        \  `  /
         ): :(
         :o_o:
          "-"
"""

FRAMEWORK_LAUNCH: Output = (
    (FRAMEWORK_BANNER, P),
    ("C-Force Metasploit Framework v6.3.4-dev", S),
    ("[*] Starting the Metasploit Framework console...", P),
)

SEARCH_RESULTS: Output = (
    ("   #  Name                                  Disclosure Date  Rank       Check  Description", P),
    ("   -  ----                                  ---------------  ----       -----  -----------", P),
    ("   0  exploit/multi/http/apache_normalize   2021-10-05       excellent  Yes    Apache Path Traversal", P),
    ("   1  exploit/windows/smb/ms17_010_eternal  2017-03-14       average    Yes    MS17-010 EternalBlue", P),
)

PAYLOADS: Output = (
    ("Compatible Payloads:", S),
    ("   Name                                 Description", P),
    ("   ----                                 -----------", P),
    ("   linux/x64/meterpreter/reverse_tcp    Inject meterpreter server (Linux x64)", P),
    ("   linux/x64/shell/reverse_tcp          Spawn a command shell (Linux x64)", P),
    (f"   {DEFAULT_PAYLOAD:<37}Connect back to attacker and spawn a shell", P),
    ("   php/meterpreter/reverse_tcp          Run a meterpreter server in PHP", P),
    ("   windows/x64/meterpreter/reverse_tcp  Inject meterpreter server (Windows x64)", P),
    ("   java/jsp_shell_reverse_tcp           Connect back via JSP shell", P),
)


def module_options(target: str | None) -> Output:
    return (
        ("Module Options:", S),
        ("   Name     Current Setting  Required  Description", P),
        ("   ----     ---------------  --------  -----------", P),
        (f"   RHOSTS   {target or '':<17}yes       The target address", P),
        ("   RPORT    80               yes       The target port", P),
        (f"   LHOST    {LISTEN_HOST:<17}yes       The listen address", P),
    )


SESSIONS_HEADER: Output = (
    ("Active sessions:", S),
    ("  Id  Type                     Information                            Connection", P),
    ("  --  ----                     -----------                            ----------", P),
)


def session_row(target: str) -> str:
    return f"  1   meterpreter x64/linux    root @ CFORCE_TARGET_01                {LISTEN_HOST}:{LISTEN_PORT} -> {target}:56732"


# ── Interactive session ──

SYSINFO: Output = (
    ("Computer     : CFORCE_TARGET_01", P),
    ("OS           : Linux 5.4.0-89-generic (x64)", P),
    ("Architecture : x64", P),
    ("Meterpreter  : x64/linux", P),
)

HASHDUMP_LINE = "root:$6$rounds=5000$Usesomesillystring$D4I06s.f.:0:0:root:/root:/bin/bash"

SHELL_DROP: Output = (
    ("Process 2301 created.", P),
    ("Channel 1 created.", P),
    ("# whoami", LineKind.INPUT),
    ("root", P),
)

# ── Passive scan ──

FINDINGS: tuple[Finding, ...] = (
    Finding(
        id="V-102",
        title="Apache 2.4.49 Path Traversal",
        severity="CRITICAL",
        cvss=9.8,
        component="Web Server (Apache)",
        description="Version 2.4.49 is vulnerable to path traversal (CVE-2021-41773). Immediate patching required.",
        category="CVE",
        method="Passive Banner Analysis",
    ),
    Finding(
        id="V-205",
        title="Exposed .git Directory",
        severity="HIGH",
        cvss=7.5,
        component="Web Root",
        description="Publicly accessible .git repository allows reconstruction of source code.",
        category="INFO_DISC",
        method="Passive URI Check",
    ),
    Finding(
        id="V-310",
        title="Open Port 3389 (RDP)",
        severity="HIGH",
        cvss=7.1,
        component="Network / Firewall",
        description="Remote Desktop Protocol exposed to public internet. High risk of brute-force attacks.",
        category="EXPOSED",
        method="Passive Port Sweep",
    ),
    Finding(
        id="V-401",
        title="Missing HSTS Header",
        severity="MEDIUM",
        cvss=4.5,
        component="HTTP Response",
        description="Strict-Transport-Security header not present, allowing potential SSL stripping.",
        category="MISCONFIG",
        method="Header Analysis",
    ),
)


def scan_steps(target: str) -> list[Step]:
    return [
        Step(0, StartScan()),
        line(100, f"[*] Starting passive scan on {target}", S),
        line(700, "[+] Resolving DNS..."),
        line(700, "[+] Checking port reachability..."),
        line(700, "[*] Banner grabbing active..."),
        line(800, "[!] WARN: Suspicious header detected (Apache/2.4.49)", LineKind.WARNING),
        line(1000, "[+] Analyzing SSL/TLS chain..."),
        line(1000, "[+] Correlating with CVE database..."),
        line(1000, "[!] CRITICAL: CVE-2021-41773 CONFIRMED", LineKind.ERROR),
        line(1000, "[*] Scan finished. Report generated.", LineKind.SUCCESS),
        Step(0, CompleteScan(FINDINGS)),
    ]


# ── Brute force ──

WP_CRACKED_PASSWORD = "P@ssw0rd123"
SSH_CRACKED_PASSWORD = "master"
SSH_WORDLIST = ("123456", "password", "root", "admin", "qwerty", SSH_CRACKED_PASSWORD)
WORDLIST_PATH = "/usr/share/wordlists/rockyou.txt"


def wp_wordlist(username: str) -> tuple[str, ...]:
    return ("123456", "password", f"{username}123", WP_CRACKED_PASSWORD, "welcome1", "letmein")


def brute_force_steps(target: str, rng: random.Random) -> Iterator[Step]:
    """Web login enumeration followed by a wordlist attack.

    On a vulnerable target the attempt with the cracked password becomes a
    single success line and the sequence ends there.
    """
    host = clean_target(target)
    user = guess_username(target)
    vulnerable = is_vulnerable(target)

    yield Step(0, SetContext(Context.ROOT))
    yield line(0, f"{ROOT_PROMPT} wpscan --url http://{host} --enumerate u", LineKind.INPUT)
    yield line(1000, "_______________________________________________________________")
    yield line(0, "         __          _______   _____can")
    yield line(0, r"         \ \        / /  __ \ / ____|")
    yield line(0, "_______________________________________________________________")
    yield line(0, f"[+] URL: http://{host}/")

    if vulnerable:
        yield line(1000, "[i] User(s) Identified:", S)
        yield line(0, f"[+] {user}", LineKind.WARNING)
        yield line(0, " | ID: 1")
    else:
        yield line(1000, "[!] Passive enumeration incomplete.", LineKind.WARNING)
        yield line(0, f"[!] Attempting brute force on detected author archive: '{user}'", S)
        yield line(1500, "[i] User(s) Identified:", S)
        yield line(0, f"[+] {user}", LineKind.WARNING)

    yield line(
        1500,
        f"{ROOT_PROMPT} wpscan --url http://{host} --usernames {user} --passwords {WORDLIST_PATH}",
        LineKind.INPUT,
    )
    yield line(1000, "[+] Performing password attack on Wp-Login against 1 user/s", S)
    yield line(0, "[+] Wordlist: rockyou.txt")

    lead_in = 1000.0
    for password in wp_wordlist(user):
        delay = lead_in + rng.uniform(200, 500)
        lead_in = 0.0
        if vulnerable and password == WP_CRACKED_PASSWORD:
            yield line(
                delay,
                f"[SUCCESS] Password found! | Username: {user} | Password: {password}",
                LineKind.SUCCESS,
            )
            return
        yield line(delay, f"[ATTEMPT] {user} : {password} ... Failed", LineKind.ERROR)

    yield line(0, "[!] Reached end of wordlist. No valid credentials found.", LineKind.ERROR)


def ssh_brute_force_steps(target: str, rng: random.Random) -> Iterator[Step]:
    host = clean_target(target)
    vulnerable = is_vulnerable(target)
    total = len(SSH_WORDLIST)

    yield Step(0, SetContext(Context.ROOT))
    yield line(0, f"{ROOT_PROMPT} hydra -l root -P {WORDLIST_PATH} ssh://{host}", LineKind.INPUT)
    yield line(
        1000,
        "Hydra v9.1 (c) 2020 by van Hauser/THC - Please do not use in military or secret service "
        "organizations, or for illegal purposes.",
        S,
    )
    yield line(500, f"[DATA] max 16 tasks, 1 server, {total} login tries (l:1/p:{total}), ~1 tries per task")
    yield line(0, f"[DATA] attacking ssh://{host}:22/")

    lead_in = 1000.0
    for number, password in enumerate(SSH_WORDLIST, start=1):
        delay = lead_in + rng.uniform(400, 800)
        lead_in = 0.0
        if vulnerable and password == SSH_CRACKED_PASSWORD:
            yield line(delay, f"[22][ssh] host: {host}   login: root   password: {password}", LineKind.SUCCESS)
            yield line(0, "[STATUS] attack finished: 1 valid password found", S)
            return
        yield line(
            delay,
            f'[ATTEMPT] target {host} - login "root" - pass "{password}" - {number} of {total} ... failed',
            LineKind.ERROR,
        )

    yield line(0, "[DATA] 0 valid passwords found", LineKind.WARNING)


# ── Flood ──

FLOOD_BANNER = """
╔══════════════════════════════════════════════════════════╗
║                                                          ║
║  ███████╗██╗  ██╗ █████╗ ██████╗  ██████╗ ███████╗       ║
║  ██╔════╝╚██╗██╔╝██╔══██╗██╔══██╗██╔═══██╗██╔════╝       ║
║  █████╗   ╚███╔╝ ███████║██║  ██║██║   ██║███████╗       ║
║  ██╔══╝   ██╔██╗ ██╔══██║██║  ██║██║   ██║╚════██║       ║
║  ███████╗██╔╝ ██╗██║  ██║██████╔╝╚██████╔╝███████║       ║
║  ╚══════╝╚═╝  ╚═╝╚═╝  ╚═╝╚═════╝  ╚═════╝ ╚══════╝       ║
║                                                          ║
║           E X A D O S   S U P E R   D D O S   V 3 0      ║
║           WITH VIP & TLS ADVANCED METHODS                ║
║           SIMULATION ONLY - NO TRAFFIC IS SENT           ║
║                                                          ║
╚══════════════════════════════════════════════════════════╝"""

FLOOD_MENU = """
[1-10] STANDARD METHODS:
[1] HTTP-GET Flood       [2] HTTP-POST Flood
[3] HTTPS-GET Flood      [4] HTTPS-POST Flood
[5] TCP SYN Flood        [6] UDP Flood
[7] Slowloris Attack     [8] RUDY Attack
[9] LOIC-Style Attack    [10] Mixed All Methods

[ADVANCED METHODS]
[11] GFLOOD Bypass        - Advanced TCP bypass
[12] GHOST Attack         - Vulnerability exploit
[13] KONTOL Method        - High intensity connection flood
[14] L4 TCP Flood         - Layer 4 packet flood
[15] HTTPW Method         - Web application flood
[16] BY-PASS Ultimate     - Combined bypass techniques

[VIP & TLS METHODS]
[17] TLS-HELLO Flood      - TLS handshake overwhelm
[18] VIP Method           - Proxy rotation attack
[19] TLS-Renegotiation    - TLS renegotiation exploit
[20] VIP-TLS Combo        - Combined VIP & TLS attack
"""

FLOOD_METHOD = "VIP-TLS Combo"
FLOOD_THREADS = 1000

FLOOD_MESSAGES = (
    "VIP Method #{packets} | Status: 200 | Proxy: True",
    "TLS HELLO Flood #{packets} | Handshakes: 500",
    "VIP Method #{packets} | Connections: 10",
    "VIP-TLS Combo #{packets} | Attacks: 2",
)

FLOOD_TICK_KINDS = (LineKind.ERROR, LineKind.SUCCESS, LineKind.WARNING, LineKind.SYSTEM, LineKind.PLAIN)


def flood_preamble_steps(target: str, duration_s: float) -> list[Step]:
    host = clean_target(target)
    err = LineKind.ERROR
    ok = LineKind.SUCCESS
    ask = LineKind.INPUT
    warn = LineKind.WARNING
    return [
        Step(0, SetContext(Context.ROOT)),
        line(0, f"{ROOT_PROMPT} python3 exados.py", ask),
        line(800, RULE),
        line(0, FLOOD_BANNER, err),
        line(800, "Welcome to EXADOS SUPER DDoS Tool v30.0"),
        line(0, RULE, warn),
        line(0, "⚠️  VIP & TLS EDITION - EXTREME POWER WARNING! ⚠️", err),
        line(0, RULE, warn),
        line(500, FLOOD_MENU),
        line(1000, "[?] Select attack method (0-20): 20", ask),
        line(500, f"[+] Selected: {FLOOD_METHOD}", warn),
        line(500, f"[?] Enter target URL: http://{host}", ask),
        line(500, f"[?] Number of threads (1-2000): {FLOOD_THREADS}", ask),
        line(500, f"[?] Attack duration in seconds: {duration_s:g}", ask),
        line(500, "[?] Power level (1-100): 100", ask),
        line(0, RULE),
        line(0, "⚠️  EXTREME WARNING: VIP/TLS METHOD SELECTED!", err),
        line(0, "⚠️  These methods are highly aggressive!", err),
        line(0, "⚠️  High risk of detection and legal action!", err),
        line(0, RULE),
        line(800, "[?] Confirm attack? (yes/no): yes", ask),
        line(500, f"[+] Starting SUPER attack with {FLOOD_THREADS} threads...", ok),
        line(0, f"[+] Target: http://{host}", ok),
        line(0, f"[+] Duration: {duration_s:g} seconds", ok),
        line(0, f"[+] Method: {FLOOD_METHOD}", ok),
        line(0, "[+] Power Level: 100/100", ok),
        line(0, RULE),
    ]


def flood_summary_steps(packets: int, duration_s: float) -> list[Step]:
    ok = LineKind.SUCCESS
    rate = packets / duration_s if duration_s else float(packets)
    return [
        line(0, "[+] Attack duration completed. Stopping threads...", ok),
        line(0, f"[+] SUPER Attack finished. Total requests: {packets}", ok),
        line(0, f"[+] Attack power: {rate:.2f} requests/second", ok),
        line(0, "[+] VIP/TLS Methods used: Advanced encryption attacks", LineKind.WARNING),
        line(0, RULE, LineKind.WARNING),
    ]

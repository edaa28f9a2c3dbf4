# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared constants for cforce."""

from __future__ import annotations

# Prompt labels per context
ROOT_PROMPT = "root@cforce:~#"
FRAMEWORK_PROMPT = "msf6 >"
MODULE_PROMPT_TEMPLATE = "msf6 exploit({module}) >"
INTERACTIVE_PROMPT = "meterpreter >"

# Greeting shown when a session is created
GREETING_TITLE = "C-FORCE OFFENSIVE SECURITY SUITE [v2.4.0]"
GREETING_NOTICE = "Authorized Access Only. All actions logged."
GREETING_HINT = 'Type "help" for available commands.'

# Framework commands that lazily launch the framework console from ROOT
ESCALATING_COMMANDS = frozenset({"use", "search", "show", "set"})

# Simulated local listener
LISTEN_HOST = "10.0.0.5"
LISTEN_PORT = 4444

DEFAULT_PAYLOAD = "generic/shell_reverse_tcp"
AUTO_EXPLOIT_MODULE = "exploit/multi/http/apache_normalize_path"

# Only interactive session id a simulated run ever opens
SESSION_ID = "1"

# Pauses (ms) inside otherwise synchronous commands
ESCALATION_DELAY_MS = 500
CHECK_DELAY_MS = 1000
EXPLOIT_DELAY_MS = 1500
HASHDUMP_DELAY_MS = 1000

# Default flood loop timing
DEFAULT_FLOOD_TICK_MS = 60
DEFAULT_FLOOD_DURATION_MS = 6000
DEFAULT_FLOOD_PACKETS_PER_TICK = 15

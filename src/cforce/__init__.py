# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scripted operations-console terminal engine."""

from __future__ import annotations

from cforce.core.session import TerminalSession
from cforce.core.state import Context, SessionState
from cforce.terminal.lines import Line, LineKind

__all__ = ["Context", "Line", "LineKind", "SessionState", "TerminalSession"]

__version__ = "0.1.0"

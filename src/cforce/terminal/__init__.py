# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal input/output layer: lines, parsing, prompts, targets."""

from __future__ import annotations

from cforce.terminal.lines import Line, LineKind
from cforce.terminal.parser import CommandKind, ParsedCommand, parse_command
from cforce.terminal.prompt import prompt_label
from cforce.terminal.targets import TargetClass, classify_target, clean_target, guess_username

__all__ = [
    "CommandKind",
    "Line",
    "LineKind",
    "ParsedCommand",
    "TargetClass",
    "classify_target",
    "clean_target",
    "guess_username",
    "parse_command",
    "prompt_label",
]

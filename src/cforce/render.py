# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Rich rendering of scrollback lines."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from cforce.terminal.lines import Line, LineKind

LINE_STYLES: dict[LineKind, str] = {
    LineKind.INPUT: "bold white",
    LineKind.SYSTEM: "cyan",
    LineKind.SUCCESS: "bold green",
    LineKind.ERROR: "red",
    LineKind.WARNING: "yellow",
    LineKind.PLAIN: "grey70",
}


def render_line(line: Line) -> Text:
    return Text(line.text, style=LINE_STYLES.get(line.kind, ""))


class LinePrinter:
    """Session watcher that prints each new line to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def __call__(self, line: Line | None) -> None:
        if line is None:
            self.console.clear()
            return
        self.console.print(render_line(line), highlight=False, soft_wrap=True)

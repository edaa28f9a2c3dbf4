# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSONL transcript of a console session.

One record per scrollback change:
    {"ts": 1700000000.0, "event": "line", "kind": "error", "text": "..."}
    {"ts": 1700000000.5, "event": "clear"}
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from cforce.logging.config import get_logger
from cforce.terminal.lines import Line, LineKind

if TYPE_CHECKING:
    from cforce.core.session import TerminalSession

logger = get_logger(__name__)


class TranscriptRecorder:
    """Append scrollback changes of a session to a JSONL file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._fh: TextIO | None = None
        self._session: TerminalSession | None = None
        self.records_written = 0

    def __enter__(self) -> TranscriptRecorder:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def attach(self, session: TerminalSession) -> None:
        """Start recording *session*; existing scrollback is written first."""
        self.detach()
        for line in session.state.scrollback:
            self.record(line)
        session.add_watch(self.record)
        self._session = session

    def detach(self) -> None:
        if self._session is not None:
            self._session.remove_watch(self.record)
            self._session = None

    def record(self, line: Line | None) -> None:
        if line is None:
            self._write({"ts": time.time(), "event": "clear"})
        else:
            self._write({"ts": time.time(), "event": "line", "kind": line.kind.value, "text": line.text})

    def _write(self, record: dict[str, Any]) -> None:
        if self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("a", encoding="utf-8")
            logger.debug("transcript_opened", path=str(self.path))
        self._fh.write(json.dumps(record, ensure_ascii=False) + "\n")
        self._fh.flush()
        self.records_written += 1

    def close(self) -> None:
        self.detach()
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.debug("transcript_closed", path=str(self.path), records=self.records_written)


def read_transcript(path: str | Path) -> list[Line]:
    """Rebuild the final scrollback from a transcript file.

    Clear records reset the rebuilt scrollback, as they did in the session.
    """
    lines: list[Line] = []
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        if not raw.strip():
            continue
        record = json.loads(raw)
        match record.get("event"):
            case "clear":
                lines.clear()
            case "line":
                lines.append(Line(text=record.get("text", ""), kind=LineKind(record.get("kind", "plain"))))
    return lines

# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scrollback line values."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class LineKind(StrEnum):
    """Styling class of a scrollback line."""

    INPUT = "input"  # Echo of a submitted command
    SYSTEM = "system"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    PLAIN = "plain"


class Line(BaseModel):
    text: str
    kind: LineKind = LineKind.PLAIN

    model_config = ConfigDict(frozen=True)

# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging layer for console sessions."""

from __future__ import annotations

from cforce.logging.config import configure_logging, get_logger
from cforce.logging.transcript import TranscriptRecorder

__all__ = ["TranscriptRecorder", "configure_logging", "get_logger"]

# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filesystem paths and transcript-root helpers."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path

from platformdirs import user_data_dir

ENV_TRANSCRIPT_ROOT = "CFORCE_TRANSCRIPT_ROOT"


def default_transcript_root() -> Path:
    """Get the default transcript root directory."""
    env_root = os.getenv(ENV_TRANSCRIPT_ROOT)
    if env_root:
        return Path(env_root)
    return Path(user_data_dir("cforce", "cforce")) / "transcripts"


def validate_transcript_root(transcript_root: Path) -> Path:
    """Create the transcript root if needed and return it."""
    transcript_root.mkdir(parents=True, exist_ok=True)
    return transcript_root


def new_transcript_path(transcript_root: Path) -> Path:
    """Return a fresh, timestamped transcript file path under *transcript_root*."""
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%fZ")
    return validate_transcript_root(transcript_root) / f"session-{stamp}.jsonl"

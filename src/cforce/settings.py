# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cforce.constants import (
    DEFAULT_FLOOD_DURATION_MS,
    DEFAULT_FLOOD_PACKETS_PER_TICK,
    DEFAULT_FLOOD_TICK_MS,
)
from cforce.paths import default_transcript_root


class FloodConfig(BaseModel):
    """Timing of the flood emission loop."""

    tick_ms: int = Field(default=DEFAULT_FLOOD_TICK_MS, gt=0)
    duration_ms: int = Field(default=DEFAULT_FLOOD_DURATION_MS, gt=0)
    packets_per_tick: int = Field(default=DEFAULT_FLOOD_PACKETS_PER_TICK, gt=0)


class Settings(BaseSettings):
    log_level: str = "WARNING"
    time_scale: float = Field(default=1.0, ge=0.0)
    seed: int | None = None
    flood: FloodConfig = Field(default_factory=FloodConfig)
    transcript_root: Path = Field(default_factory=default_transcript_root)

    model_config = SettingsConfigDict(
        env_prefix="CFORCE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

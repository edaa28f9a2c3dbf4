"""Tests for settings and transcript-root resolution."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cforce.logging import configure_logging, get_logger
from cforce.paths import ENV_TRANSCRIPT_ROOT, default_transcript_root
from cforce.settings import FloodConfig, Settings


def test_defaults() -> None:
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings()

    assert settings.log_level == "WARNING"
    assert settings.time_scale == 1.0
    assert settings.seed is None
    assert settings.flood == FloodConfig(tick_ms=60, duration_ms=6000, packets_per_tick=15)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CFORCE_TIME_SCALE", "0.5")
    monkeypatch.setenv("CFORCE_SEED", "7")
    monkeypatch.setenv("CFORCE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("CFORCE_FLOOD__TICK_MS", "10")

    settings = Settings()

    assert settings.time_scale == 0.5
    assert settings.seed == 7
    assert settings.log_level == "DEBUG"
    assert settings.flood.tick_ms == 10
    assert settings.flood.duration_ms == 6000


def test_negative_time_scale_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(time_scale=-1)


@pytest.mark.parametrize("field", ["tick_ms", "duration_ms", "packets_per_tick"])
def test_flood_config_must_be_positive(field: str) -> None:
    with pytest.raises(ValidationError):
        FloodConfig(**{field: 0})


def test_env_var_sets_transcript_root(tmp_path: Path) -> None:
    custom = tmp_path / "custom_transcripts"

    with patch.dict(os.environ, {ENV_TRANSCRIPT_ROOT: str(custom)}):
        assert default_transcript_root() == custom
        assert Settings().transcript_root == custom


def test_transcript_root_falls_back_to_user_data_dir() -> None:
    with patch.dict(os.environ, {}, clear=True):
        root = default_transcript_root()

    assert root.name == "transcripts"
    assert "cforce" in str(root)


def test_configure_logging_filters_below_level(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(Settings(log_level="error"))
    log = get_logger("cforce.test")

    log.warning("quiet_event")
    log.error("loud_event", code=7)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "loud_event" in captured.err
    assert "quiet_event" not in captured.err


def test_configure_logging_unknown_level_defaults_to_warning(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(Settings(log_level="chatty"))
    log = get_logger("cforce.test")

    log.info("info_event")
    log.warning("warning_event")

    err = capsys.readouterr().err
    assert "warning_event" in err
    assert "info_event" not in err

# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterator
from typing import Any

import pytest
import structlog

from cforce.core.session import TerminalSession
from cforce.core.state import SessionState
from cforce.settings import Settings


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Drop any logging configuration a test (or the CLI) installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def instant_settings() -> Settings:
    """Settings with every scripted delay collapsed to zero."""
    return Settings(time_scale=0.0, seed=1337)


@pytest.fixture
def make_session(instant_settings: Settings) -> Callable[..., TerminalSession]:
    """Factory for sessions that play sequences instantly and deterministically."""

    def _make(state: SessionState | None = None, **kwargs: Any) -> TerminalSession:
        kwargs.setdefault("rng", random.Random(1337))
        return TerminalSession(instant_settings, state=state, **kwargs)

    return _make

# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target normalization and classification.

Whether a simulated attack "succeeds" depends only on the target string, so
runs are reproducible. Lab/test targets are vulnerable; everything else is
treated as hardened.
"""

from __future__ import annotations

import re
from enum import StrEnum

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_IPV4_PREFIX_RE = re.compile(r"^\d{1,3}\.")

LAB_MARKERS = ("test", "demo")
PRIVATE_PREFIXES = ("10.", "192.", "127.")
DEFAULT_USERNAME = "admin"


class TargetClass(StrEnum):
    VULNERABLE = "vulnerable"
    HARDENED = "hardened"


def clean_target(target: str) -> str:
    """Strip a leading http(s) scheme and a trailing slash."""
    cleaned = _SCHEME_RE.sub("", target.strip())
    return cleaned.removesuffix("/")


def classify_target(target: str) -> TargetClass:
    cleaned = clean_target(target)
    if any(marker in cleaned for marker in LAB_MARKERS):
        return TargetClass.VULNERABLE
    if cleaned.startswith(PRIVATE_PREFIXES):
        return TargetClass.VULNERABLE
    return TargetClass.HARDENED


def is_vulnerable(target: str) -> bool:
    return classify_target(target) is TargetClass.VULNERABLE


def guess_username(target: str) -> str:
    """Guess a login name from the first domain label (``www`` and IPs excluded)."""
    cleaned = clean_target(target)
    if _IPV4_PREFIX_RE.match(cleaned):
        return DEFAULT_USERNAME
    first = cleaned.split(".", 1)[0]
    if first and first != "www":
        return first
    return DEFAULT_USERNAME

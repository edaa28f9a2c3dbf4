# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Prompt labels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cforce.constants import (
    FRAMEWORK_PROMPT,
    INTERACTIVE_PROMPT,
    MODULE_PROMPT_TEMPLATE,
    ROOT_PROMPT,
)

if TYPE_CHECKING:
    from cforce.core.state import Context


def prompt_label(context: Context, active_module: str | None = None) -> str:
    """Return the prompt shown for *context*.

    The module console shows only the last path segment of the active module,
    e.g. ``exploit/multi/http/apache_normalize_path`` -> ``apache_normalize_path``.
    """
    from cforce.core.state import Context

    match context:
        case Context.ROOT:
            return ROOT_PROMPT
        case Context.FRAMEWORK:
            return FRAMEWORK_PROMPT
        case Context.MODULE:
            module = (active_module or "").rsplit("/", 1)[-1]
            return MODULE_PROMPT_TEMPLATE.format(module=module)
        case Context.INTERACTIVE:
            return INTERACTIVE_PROMPT
    return "> "

"""Tests for prompt labels."""

from __future__ import annotations

from cforce.core.state import Context
from cforce.terminal.prompt import prompt_label


def test_prompt_labels_per_context() -> None:
    assert prompt_label(Context.ROOT) == "root@cforce:~#"
    assert prompt_label(Context.FRAMEWORK) == "msf6 >"
    assert prompt_label(Context.INTERACTIVE) == "meterpreter >"


def test_module_prompt_uses_last_path_segment() -> None:
    label = prompt_label(Context.MODULE, "exploit/multi/http/apache_normalize_path")

    assert label == "msf6 exploit(apache_normalize_path) >"


def test_module_prompt_without_path_separator() -> None:
    assert prompt_label(Context.MODULE, "foo") == "msf6 exploit(foo) >"

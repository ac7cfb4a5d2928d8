"""Shared CLI testing utilities."""

from __future__ import annotations

import re
from typing import Any

from typer.testing import CliRunner

_ANSI_RE = re.compile(r"\x1B\[[0-9;?]*[ -/]*[@-~]")


def cli_text(result: Any) -> str:
    """Return CLI output with ANSI escapes stripped for assertions."""

    return _ANSI_RE.sub("", result.output or "")


__all__ = ["CliRunner", "cli_text"]

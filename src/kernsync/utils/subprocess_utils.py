"""Subprocess utilities for running commands."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional


def git_output(args: List[str], cwd: Optional[Path] = None, strip: bool = True) -> str:
    """Run a git command and return its output.

    Pass `strip=False` for NUL-separated output, where surrounding whitespace
    belongs to the listed names.
    """
    out = subprocess.check_output(
        ["git", *args],
        cwd=str(cwd) if cwd else None,
        encoding="utf-8",
        stderr=subprocess.PIPE,
    )
    return out.strip() if strip else out

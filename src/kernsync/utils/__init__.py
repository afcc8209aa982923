"""Utility modules for kernsync."""

from .console import console, err_console
from .subprocess_utils import git_output

__all__ = ["console", "err_console", "git_output"]

"""Shared rich consoles.

Markup and highlighting are off: messages carry file paths, which must print
verbatim.
"""

from rich.console import Console

console = Console(soft_wrap=True, highlight=False, markup=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, markup=False)

"""Exceptions raised by kernsync."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .sync.differ import SyncReport
    from .sync.mapper import FileMapping


class SyncError(Exception):
    """Base class for failures that abort a sync run"""


class SourceTreeError(SyncError):
    """Raise when tracked files cannot be enumerated from the source repository"""


class MissingDestinationError(SyncError):
    """Raise when one or more destinations are absent from the kernel tree.

    Carries every missing mapping, not only the first one found, and the
    report of the aborted run when there is one.
    """

    def __init__(
        self,
        missing: Sequence["FileMapping"],
        report: Optional["SyncReport"] = None,
    ) -> None:
        self.missing = list(missing)
        self.report = report
        super().__init__(
            f"{len(self.missing)} destination(s) missing from the kernel tree"
        )


class CopyFailure(SyncError):
    """Raise when reading a source or writing a destination fails mid-run"""

    def __init__(self, source: str, destination: Path, reason: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"Failed to sync {source} -> {destination}: {reason}")


class ChainError(Exception):
    """Raise when build targets cannot be chained (empty or duplicate names)"""

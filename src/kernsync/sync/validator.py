"""Pre-flight existence check for the kernel tree."""

from __future__ import annotations

from typing import Iterable, List

from .mapper import FileMapping


def find_missing(mappings: Iterable[FileMapping]) -> List[FileMapping]:
    """Return every mapping whose destination is not an existing file.

    Destinations are never created: a kernel tree that lacks one of them has not
    been prepared for this sync.
    """
    return [m for m in mappings if not m.destination.is_file()]

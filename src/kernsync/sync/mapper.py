"""Source-to-destination path mapping."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Sequence


class Category(str, enum.Enum):
    HEADER = "header"
    SCHED_BROAD = "scheduler-broad"
    SCHED_NARROW = "scheduler-narrow"


@dataclass(frozen=True)
class FileMapping:
    category: Category
    source: str  # repo-relative POSIX path
    destination: Path


def _strip_group(source: str, group: Optional[str]) -> Optional[PurePosixPath]:
    path = PurePosixPath(source)
    if group is None:
        if len(path.parts) < 2:
            return None
        return PurePosixPath(*path.parts[1:])
    try:
        rest = path.relative_to(PurePosixPath(group))
    except ValueError:
        return None
    return rest if rest.parts else None


def map_path(
    source: str,
    category: Category,
    kernel_dir: Path,
    allow: Sequence[str] = (),
    group: Optional[str] = None,
) -> Optional[FileMapping]:
    """Map one tracked source path into the kernel tree.

    Headers keep their path relative to the kernel directory. Scheduler sources
    drop their group directory, so `kernel-examples/scx_simple.bpf.c` lands at
    `<kernel>/scx_simple.bpf.c`. The group is `group` when given (it may span
    several segments, e.g. `scheds/rust`) and the first segment otherwise; a
    source outside `group` maps to None. Narrow sources additionally need their
    component (`<group>/<component>/...`) to be in `allow`.
    """
    if category is Category.HEADER:
        return FileMapping(category, source, kernel_dir / source)

    rest = _strip_group(source, group)
    if rest is None:
        return None

    if category is Category.SCHED_NARROW:
        if len(rest.parts) < 2 or rest.parts[0] not in allow:
            return None

    return FileMapping(category, source, kernel_dir / rest)


def map_paths(
    sources: Iterable[str],
    category: Category,
    kernel_dir: Path,
    allow: Sequence[str] = (),
    group: Optional[str] = None,
) -> List[FileMapping]:
    mappings: List[FileMapping] = []
    for source in sources:
        mapping = map_path(source, category, kernel_dir, allow, group)
        if mapping is not None:
            mappings.append(mapping)
    return mappings

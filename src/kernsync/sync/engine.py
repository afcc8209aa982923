"""End-to-end sync: enumerate, map, validate, then copy."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..config import SyncSettings
from ..errors import MissingDestinationError
from ..git import GitTrackedFiles, TrackedFiles, exclude_matching
from ..utils import console
from .differ import SyncReport, sync_mappings
from .mapper import Category, FileMapping, map_paths
from .transform import TransformRule, drop_dependency_path
from .validator import find_missing


def kernel_dir_for(tree: Path, settings: SyncSettings) -> Path:
    """Directory inside the kernel tree that mirrors the scheduler repository."""
    return tree / settings["kernel_subdir"]


def transform_rules(settings: SyncSettings) -> List[TransformRule]:
    return [
        drop_dependency_path(
            settings["manifest_dependency"], filename=settings["manifest_name"]
        )
    ]


def plan_sync(
    kernel_dir: Path, settings: SyncSettings, tracked: TrackedFiles
) -> List[FileMapping]:
    """Compute every mapping, headers first and scheduler sources after."""
    headers = exclude_matching(
        tracked.list_files(settings["header_paths"]), settings["header_exclude"]
    )
    mappings = map_paths(headers, Category.HEADER, kernel_dir)
    for group in settings["broad_groups"]:
        broad = exclude_matching(tracked.list_files([group]), settings["sched_exclude"])
        mappings += map_paths(broad, Category.SCHED_BROAD, kernel_dir, group=group)

    group = settings["narrow_group"]
    narrow = exclude_matching(tracked.list_files([group]), settings["sched_exclude"])
    mappings += map_paths(
        narrow,
        Category.SCHED_NARROW,
        kernel_dir,
        allow=settings["narrow_allow"],
        group=group,
    )
    return mappings


def run_sync(
    repo_root: Path,
    tree: Path,
    settings: SyncSettings,
    tracked: Optional[TrackedFiles] = None,
    dry_run: bool = False,
) -> SyncReport:
    """Mirror the configured files from `repo_root` into the kernel `tree`.

    Every destination is checked before anything is written; a
    MissingDestinationError leaves the tree untouched.
    """
    kernel_dir = kernel_dir_for(tree, settings)
    if tracked is None:
        tracked = GitTrackedFiles(repo_root)
    mappings = plan_sync(kernel_dir, settings, tracked)

    report = SyncReport(total=len(mappings), dry_run=dry_run)
    report.headers = sum(1 for m in mappings if m.category is Category.HEADER)
    report.sources = report.total - report.headers

    console.print(
        f"Syncing {report.headers} headers and {report.sources} scheduler source files to {kernel_dir}"
    )

    missing = find_missing(mappings)
    report.missing = len(missing)
    if missing:
        raise MissingDestinationError(missing, report=report)

    sync_mappings(repo_root, mappings, transform_rules(settings), report, dry_run=dry_run)
    console.print(f"Skipped {report.skipped} unchanged files")
    return report

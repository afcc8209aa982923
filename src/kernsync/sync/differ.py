"""Content comparison and copy for validated mappings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..errors import CopyFailure
from ..utils import console
from .mapper import FileMapping
from .transform import TransformRule, find_rule


@dataclass(frozen=True)
class SyncedFile:
    mapping: FileMapping
    rewrite_note: Optional[str] = None


@dataclass
class SyncReport:
    total: int = 0
    headers: int = 0
    sources: int = 0
    missing: int = 0
    skipped: int = 0
    copied: int = 0
    dry_run: bool = False
    synced: List[SyncedFile] = field(default_factory=list)


def effective_content(
    repo_root: Path, mapping: FileMapping, rules: Sequence[TransformRule]
) -> Tuple[bytes, Optional[TransformRule]]:
    """Return the bytes that should end up at the destination.

    Manifests are rewritten in memory; the source file itself is never touched.
    """
    source_file = repo_root / mapping.source
    try:
        raw = source_file.read_bytes()
    except OSError as e:
        raise CopyFailure(mapping.source, mapping.destination, str(e)) from e

    rule = find_rule(mapping.source, rules)
    if rule is None:
        return raw, None
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CopyFailure(mapping.source, mapping.destination, str(e)) from e
    return rule.apply(text).encode("utf-8"), rule


def sync_mapping(
    repo_root: Path,
    mapping: FileMapping,
    rules: Sequence[TransformRule],
    dry_run: bool = False,
) -> Optional[SyncedFile]:
    """Copy one file if its effective content differs. Returns None when skipped."""
    content, rule = effective_content(repo_root, mapping, rules)
    try:
        if mapping.destination.read_bytes() == content:
            return None
    except OSError as e:
        raise CopyFailure(mapping.source, mapping.destination, str(e)) from e

    note = rule.note if rule is not None and rule.note else None
    prefix = "Would sync" if dry_run else "Syncing"
    console.print(f"{prefix} {mapping.source}" + (f" ({note})" if note else ""))
    if not dry_run:
        try:
            mapping.destination.write_bytes(content)
        except OSError as e:
            raise CopyFailure(mapping.source, mapping.destination, str(e)) from e
    return SyncedFile(mapping=mapping, rewrite_note=note)


def sync_mappings(
    repo_root: Path,
    mappings: Sequence[FileMapping],
    rules: Sequence[TransformRule],
    report: SyncReport,
    dry_run: bool = False,
) -> SyncReport:
    """Sync each mapping in order, stopping at the first failure.

    Files copied before a failure stay copied; a rerun skips them.
    """
    for mapping in mappings:
        synced = sync_mapping(repo_root, mapping, rules, dry_run=dry_run)
        if synced is None:
            report.skipped += 1
            continue
        report.copied += 1
        report.synced.append(synced)
    return report

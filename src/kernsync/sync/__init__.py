"""Synchronization logic for kernsync."""

from .differ import SyncReport, SyncedFile, effective_content, sync_mapping, sync_mappings
from .engine import kernel_dir_for, plan_sync, run_sync, transform_rules
from .mapper import Category, FileMapping, map_path, map_paths
from .transform import TransformRule, drop_dependency_path, find_rule
from .validator import find_missing

__all__ = [
    "Category",
    "FileMapping",
    "SyncReport",
    "SyncedFile",
    "TransformRule",
    "drop_dependency_path",
    "effective_content",
    "find_missing",
    "find_rule",
    "kernel_dir_for",
    "map_path",
    "map_paths",
    "plan_sync",
    "run_sync",
    "sync_mapping",
    "sync_mappings",
    "transform_rules",
]

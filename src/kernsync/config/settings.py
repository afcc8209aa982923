"""Sync and chain configuration.

Configuration discovery:
- Walk up from the source repository root looking for `.github/kernsync.yml`,
  whose keys are layered over the bundled defaults.
- If not found, fall back to the default file bundled with the package.
- Expose a memoized getter keyed by repository root.
"""

from __future__ import annotations

from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Any, Dict, List, Optional, TypedDict, cast

import yaml

CONFIG_NAME = "kernsync.yml"


class SyncSettings(TypedDict):
    """Which files are mirrored and where they land."""

    kernel_subdir: str  # tools/sched_ext
    header_paths: List[str]  # [include]
    header_exclude: List[str]  # [include/vmlinux]
    broad_groups: List[str]  # [kernel-examples]
    narrow_group: str  # rust-user
    narrow_allow: List[str]  # [scx_rusty, scx_layered]
    sched_exclude: List[str]  # [meson.build]
    manifest_name: str  # Cargo.toml
    manifest_dependency: str  # scx_utils


class ChainSettings(TypedDict):
    """Build targets to serialize and the aggregate that depends on them."""

    targets: List[str]
    command: List[str]  # argv template, `{name}` is the target name
    aggregate: str  # rust_scheds
    input: str  # meson.build


class KernsyncConfig(TypedDict):
    sync: SyncSettings
    chain: ChainSettings


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    assert isinstance(value, dict), f"'{key}' must be a mapping"
    return cast(Dict[str, Any], value)


def _str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key) or []
    assert isinstance(value, list), f"'{key}' must be a list"
    for item in value:
        assert isinstance(item, str), f"'{key}' entries must be strings"
    return list(value)


def _str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    assert isinstance(value, str) and value, f"'{key}' must be a non-empty string"
    return value


def parse_config(data: Dict[str, Any]) -> KernsyncConfig:
    sync = _section(data, "sync")
    headers = _section(sync, "headers")
    schedulers = _section(sync, "schedulers")
    narrow = _section(schedulers, "narrow")
    manifest = _section(sync, "manifest")
    chain = _section(data, "chain")

    return KernsyncConfig(
        sync=SyncSettings(
            kernel_subdir=_str(sync, "kernel_subdir"),
            header_paths=_str_list(headers, "paths"),
            header_exclude=_str_list(headers, "exclude"),
            broad_groups=_str_list(schedulers, "broad"),
            narrow_group=_str(narrow, "group"),
            narrow_allow=_str_list(narrow, "allow"),
            sched_exclude=_str_list(schedulers, "exclude"),
            manifest_name=_str(manifest, "filename"),
            manifest_dependency=_str(manifest, "dependency"),
        ),
        chain=ChainSettings(
            targets=_str_list(chain, "targets"),
            command=_str_list(chain, "command"),
            aggregate=_str(chain, "aggregate"),
            input=_str(chain, "input"),
        ),
    )


def _bundled_data() -> Dict[str, Any]:
    content = files("kernsync.config").joinpath(CONFIG_NAME).read_text(encoding="utf-8")
    data = yaml.safe_load(content) or {}
    assert isinstance(data, dict)
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay `override` onto `base`; lists are replaced, not extended."""
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(path: Path) -> KernsyncConfig:
    """Load configuration from a YAML file, layered over the bundled defaults."""
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    assert isinstance(data, dict), f"{path} must contain a mapping"
    return parse_config(_merge(_bundled_data(), data))


def load_bundled_config() -> KernsyncConfig:
    """Load the default configuration shipped with the package."""
    return parse_config(_bundled_data())


def discover_config_path(start: Path) -> Optional[Path]:
    """Return `.github/kernsync.yml` from `start` or its nearest parent, if any."""
    here = start.resolve()
    for parent in (here, *here.parents):
        candidate = parent / ".github" / CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


@lru_cache(maxsize=None)
def get_config(repo_root: Path) -> KernsyncConfig:
    """Return the configuration for a repository, discovered or default (memoized)."""
    path = discover_config_path(repo_root)
    if path is not None:
        return load_config(path)
    return load_bundled_config()

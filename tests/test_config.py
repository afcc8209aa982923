from __future__ import annotations

from pathlib import Path

import pytest

import kernsync.config.settings as settings_mod
from kernsync.config import discover_config_path, get_config, load_config


def write_config(root: Path, content: str) -> Path:
    yml = root / ".github" / "kernsync.yml"
    yml.parent.mkdir(parents=True, exist_ok=True)
    yml.write_text(content)
    return yml


def test_bundled_defaults(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings_mod, "discover_config_path", lambda start: None)
    get_config.cache_clear()
    try:
        config = get_config(tmp_path)
    finally:
        get_config.cache_clear()

    sync = config["sync"]
    assert sync["kernel_subdir"] == "tools/sched_ext"
    assert sync["header_paths"] == ["include"]
    assert sync["header_exclude"] == ["include/vmlinux"]
    assert sync["broad_groups"] == ["kernel-examples"]
    assert sync["narrow_group"] == "rust-user"
    assert sync["narrow_allow"] == ["scx_rusty", "scx_layered"]
    assert sync["sched_exclude"] == ["meson.build"]
    assert sync["manifest_dependency"] == "scx_utils"

    chain = config["chain"]
    assert chain["targets"][0] == "scx_layered"
    assert "scx_mitosis" not in chain["targets"]
    assert chain["aggregate"] == "rust_scheds"


def test_repo_file_overrides_defaults(tmp_path: Path) -> None:
    path = write_config(
        tmp_path,
        """
sync:
  schedulers:
    narrow:
      allow:
        - scx_bpfland
""".lstrip(),
    )
    config = load_config(path)
    assert config["sync"]["narrow_allow"] == ["scx_bpfland"]
    # Untouched keys keep their defaults
    assert config["sync"]["narrow_group"] == "rust-user"
    assert config["chain"]["aggregate"] == "rust_scheds"


def test_discovery_walks_up_from_repo_root(tmp_path: Path) -> None:
    path = write_config(tmp_path, "sync:\n  kernel_subdir: kernel\n")
    nested = tmp_path / "sub" / "dir"
    nested.mkdir(parents=True)

    assert discover_config_path(nested) == path.resolve()

    get_config.cache_clear()
    try:
        assert get_config(nested)["sync"]["kernel_subdir"] == "kernel"
    finally:
        get_config.cache_clear()


def test_invalid_value_is_rejected(tmp_path: Path) -> None:
    path = write_config(tmp_path, "sync:\n  headers:\n    paths: include\n")
    with pytest.raises(AssertionError):
        load_config(path)

"""Render build target declarations for the outer build engine."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import List, Sequence

from .chain import BuildTarget


def render_json(targets: Sequence[BuildTarget]) -> str:
    return json.dumps([asdict(t) for t in targets], indent=2)


def _meson_str(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _meson_list(items: Sequence[str], quote: bool = True) -> str:
    return "[" + ", ".join(_meson_str(i) if quote else i for i in items) + "]"


def render_meson(targets: Sequence[BuildTarget]) -> str:
    """Render meson `custom_target` declarations.

    Each target is assigned to a variable named after it, so later targets can
    refer to earlier ones in `depends:`.
    """
    blocks: List[str] = []
    for target in targets:
        args = [_meson_str(target.name)]
        if target.input:
            args.append(f"input: {_meson_str(target.input)}")
        args.append(f"output: {_meson_str(target.output)}")
        args.append(f"command: {_meson_list(target.command)}")
        if target.depends:
            args.append(f"depends: {_meson_list(target.depends, quote=False)}")
        if target.build_always_stale:
            args.append("build_always_stale: true")
        if target.build_by_default:
            args.append("build_by_default: true")
        indent = " " * len(f"{target.name} = custom_target(")
        blocks.append(
            f"{target.name} = custom_target(" + f",\n{indent}".join(args) + ")"
        )
    return "\n\n".join(blocks) + "\n"

"""Build target chaining for kernsync."""

from .chain import (
    BuildTarget,
    ChainState,
    aggregate_target,
    build_chain,
    chain_target,
    chain_targets,
    is_linear_chain,
    transitive_dependencies,
)
from .render import render_json, render_meson

__all__ = [
    "BuildTarget",
    "ChainState",
    "aggregate_target",
    "build_chain",
    "chain_target",
    "chain_targets",
    "is_linear_chain",
    "render_json",
    "render_meson",
    "transitive_dependencies",
]

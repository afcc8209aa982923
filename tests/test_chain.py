from __future__ import annotations

import pytest

from kernsync.build import (
    BuildTarget,
    ChainState,
    aggregate_target,
    build_chain,
    chain_target,
    chain_targets,
    is_linear_chain,
    render_meson,
    transitive_dependencies,
)
from kernsync.errors import ChainError

NAMES = ["scx_layered", "scx_rusty", "scx_rustland", "scx_lavd"]
COMMAND = ["cargo", "build", "--manifest-path", "{name}/Cargo.toml"]


def test_chain_is_a_simple_path() -> None:
    targets, state = chain_targets(NAMES, COMMAND)

    assert [t.name for t in targets] == NAMES
    assert targets[0].depends == ()
    for prev, cur in zip(targets, targets[1:]):
        assert cur.depends == (prev.name,)
    assert is_linear_chain(targets)
    assert state.tail == "scx_lavd"
    assert state.members == tuple(NAMES)


def test_aggregate_covers_exactly_the_chain() -> None:
    targets = build_chain(NAMES, COMMAND, "rust_scheds")
    by_name = {t.name: t for t in targets}
    aggregate = by_name["rust_scheds"]

    assert aggregate.depends == ("scx_lavd",)
    assert aggregate.build_by_default
    assert not aggregate.build_always_stale
    assert aggregate.output == "meson.build.__PHONY__"
    assert aggregate.command == ("touch", "meson.build.__PHONY__")
    assert transitive_dependencies(by_name, "rust_scheds") == set(NAMES)


def test_chained_targets_are_always_stale() -> None:
    targets, _ = chain_targets(NAMES, COMMAND)
    assert all(t.build_always_stale for t in targets)
    assert not any(t.build_by_default for t in targets)
    assert targets[1].command == ("cargo", "build", "--manifest-path", "scx_rusty/Cargo.toml")


def test_fold_step_does_not_mutate_prior_state() -> None:
    start = ChainState()
    first, after_first = chain_target(start, "a", ["true"])
    second, after_second = chain_target(after_first, "b", ["true"], depends=["libbpf"])

    assert start.tail is None and start.members == ()
    assert after_first.tail == "a"
    assert first.depends == ()
    assert second.depends == ("libbpf", "a")
    assert after_second.members == ("a", "b")


def test_extra_dependencies_outside_chain_keep_it_linear() -> None:
    state = ChainState()
    targets = []
    for name in ("a", "b", "c"):
        target, state = chain_target(state, name, ["true"], depends=["vmlinux_h"])
        targets.append(target)
    assert is_linear_chain(targets)


def test_empty_chain_aggregate_has_no_dependencies() -> None:
    targets = build_chain([], COMMAND, "rust_scheds")
    assert len(targets) == 1
    assert targets[0].depends == ()
    assert aggregate_target(ChainState(), "all").depends == ()


def test_duplicate_or_empty_names_are_rejected() -> None:
    with pytest.raises(ChainError):
        chain_targets(["a", "b", "a"], COMMAND)
    with pytest.raises(ChainError):
        chain_targets([""], COMMAND)
    with pytest.raises(ChainError):
        build_chain(["a", "rust_scheds"], COMMAND, "rust_scheds")


def test_branching_is_not_linear() -> None:
    a = BuildTarget("a", "a", ("true",))
    b = BuildTarget("b", "b", ("true",), depends=("a",))
    c = BuildTarget("c", "c", ("true",), depends=("a",))
    assert not is_linear_chain([a, b, c])
    assert not is_linear_chain([b, a])


def test_render_meson() -> None:
    out = render_meson(build_chain(["scx_a", "scx_b"], ["cargo", "build"], "rust_scheds"))
    assert "scx_a = custom_target('scx_a',\n" in out
    assert "depends: [scx_a]" in out
    assert "build_always_stale: true" in out
    assert "input: 'meson.build'" in out
    assert out.endswith(")\n")


def test_render_meson_escapes_quotes_and_backslashes() -> None:
    targets = build_chain(
        ["scx_a"], ["sh", "-c", "echo 'hi' \\ done"], "rust_scheds", input="it's.build"
    )
    out = render_meson(targets)
    assert "command: ['sh', '-c', 'echo \\'hi\\' \\\\ done']" in out
    assert "input: 'it\\'s.build'" in out
    assert "output: 'it\\'s.build.__PHONY__'" in out

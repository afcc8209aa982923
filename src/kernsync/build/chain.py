"""Serialize build targets by threading a dependency through each of them.

meson and cargo both build in parallel. When meson launches N cargo builds at
once and each compiles N files, the machine ends up running N*N compilers.
Chaining makes every target depend on the previous one so the chained builds
run one at a time; targets outside the chain keep their normal parallelism.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from ..errors import ChainError


@dataclass(frozen=True)
class BuildTarget:
    name: str
    output: str
    command: Tuple[str, ...]
    depends: Tuple[str, ...] = ()
    build_always_stale: bool = False
    build_by_default: bool = False
    input: Optional[str] = None


@dataclass(frozen=True)
class ChainState:
    """The tail of the chain plus the names already threaded through it."""

    tail: Optional[str] = None
    members: Tuple[str, ...] = field(default_factory=tuple)


def chain_target(
    state: ChainState,
    name: str,
    command: Sequence[str],
    output: Optional[str] = None,
    depends: Sequence[str] = (),
) -> Tuple[BuildTarget, ChainState]:
    """Declare `name` after the current tail and make it the new tail.

    Chained targets are always stale: they exist to order the builds, so the
    build engine must not skip them based on cached outputs.
    """
    if not name:
        raise ChainError("Build target name must not be empty")
    if name in state.members:
        raise ChainError(f"Build target {name} is already chained")

    deps = list(depends)
    if state.tail is not None and state.tail not in deps:
        deps.append(state.tail)

    target = BuildTarget(
        name=name,
        output=output or name,
        command=tuple(command),
        depends=tuple(deps),
        build_always_stale=True,
    )
    return target, ChainState(tail=name, members=(*state.members, name))


def chain_targets(
    names: Iterable[str],
    command_template: Sequence[str],
    state: ChainState = ChainState(),
) -> Tuple[List[BuildTarget], ChainState]:
    """Chain `names` in declaration order, formatting `{name}` into the command."""
    targets: List[BuildTarget] = []
    for name in names:
        command = [arg.format(name=name) for arg in command_template]
        target, state = chain_target(state, name, command)
        targets.append(target)
    return targets, state


def aggregate_target(state: ChainState, name: str, input: str = "meson.build") -> BuildTarget:
    """Phony target that depends on the chain tail and is built by default."""
    output = f"{PurePosixPath(input).name}.__PHONY__"
    return BuildTarget(
        name=name,
        output=output,
        command=("touch", output),
        depends=(state.tail,) if state.tail is not None else (),
        build_by_default=True,
        input=input,
    )


def build_chain(
    names: Sequence[str],
    command_template: Sequence[str],
    aggregate: str,
    input: str = "meson.build",
) -> List[BuildTarget]:
    """Return the chained targets followed by their aggregate."""
    targets, state = chain_targets(names, command_template)
    if aggregate in state.members:
        raise ChainError(f"Aggregate target {aggregate} clashes with a chained target")
    return [*targets, aggregate_target(state, aggregate, input=input)]


def transitive_dependencies(targets: Mapping[str, BuildTarget], name: str) -> Set[str]:
    """All targets reachable from `name` through declared dependencies."""
    seen: Set[str] = set()
    stack = list(targets[name].depends)
    while stack:
        dep = stack.pop()
        if dep in seen:
            continue
        seen.add(dep)
        if dep in targets:
            stack.extend(targets[dep].depends)
    return seen


def is_linear_chain(targets: Sequence[BuildTarget]) -> bool:
    """True if the targets form a simple path in order, each depending on the last.

    Only edges between members of `targets` count; dependencies on targets
    outside the set are ignored.
    """
    names = [t.name for t in targets]
    if len(set(names)) != len(names):
        return False
    members = set(names)
    dependents: Dict[str, int] = {}
    for index, target in enumerate(targets):
        internal = [d for d in target.depends if d in members]
        expected = [names[index - 1]] if index else []
        if internal != expected:
            return False
        for dep in internal:
            dependents[dep] = dependents.get(dep, 0) + 1
    return all(count == 1 for count in dependents.values())

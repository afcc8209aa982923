"""CLI interface for kernsync - mirror scheduler sources into a kernel tree."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import click

from .build import build_chain, render_json, render_meson
from .config import get_config
from .errors import ChainError, CopyFailure, MissingDestinationError, SourceTreeError
from .git import GitTrackedFiles
from .sync import kernel_dir_for, plan_sync, run_sync
from .utils import console, err_console

USAGE = "Usage: {prog} KERNEL_TREE_TO_SYNC_TO"

repo_option = click.option(
    "--repo",
    "repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Scheduler repository to sync from",
)


@click.group()
def cli() -> None:
    """Mirror scheduler sources into a kernel tree."""
    pass


@cli.command("sync")
@click.argument("trees", nargs=-1, type=click.Path(path_type=Path))
@repo_option
@click.option("--dry-run", is_flag=True, help="Report what would be synced without writing")
def sync_cmd(trees: Tuple[Path, ...], repo: Path, dry_run: bool) -> None:
    """
    Sync headers and scheduler sources into KERNEL_TREE.

    Every destination must already exist in the kernel tree; if any is missing,
    all of them are reported and nothing is written. Files whose content already
    matches are skipped, so rerunning after a failure is safe.
    """
    if len(trees) != 1:
        prog = click.get_current_context().command_path
        err_console.print(USAGE.format(prog=prog))
        raise SystemExit(1)

    settings = get_config(repo.resolve())["sync"]
    try:
        report = run_sync(repo, trees[0], settings, dry_run=dry_run)
    except MissingDestinationError as e:
        for mapping in e.missing:
            err_console.print(f"ERROR: {mapping.destination} does not exist", style="red")
        raise SystemExit(1)
    except CopyFailure as e:
        err_console.print(f"ERROR: {e}", style="bold red")
        console.print(
            "Files synced before the failure were kept; rerun to finish.", style="yellow"
        )
        raise SystemExit(1)
    except SourceTreeError as e:
        err_console.print(f"ERROR: {e}", style="bold red")
        raise SystemExit(1)

    verb = "Would sync" if dry_run else "Synced"
    console.print(f"{verb} {report.copied} of {report.total} files", style="green")


@cli.command("mappings")
@click.argument("tree", type=click.Path(path_type=Path))
@repo_option
def mappings_cmd(tree: Path, repo: Path) -> None:
    """List every source file and the kernel tree path it syncs to."""
    settings = get_config(repo.resolve())["sync"]
    try:
        mappings = plan_sync(kernel_dir_for(tree, settings), settings, GitTrackedFiles(repo))
    except SourceTreeError as e:
        err_console.print(f"ERROR: {e}", style="bold red")
        raise SystemExit(1)
    for mapping in mappings:
        print(f"{mapping.source} -> {mapping.destination}")


@cli.command("chain")
@repo_option
@click.option("--format", "fmt", type=click.Choice(["json", "meson"]), default="json")
def chain_cmd(repo: Path, fmt: str) -> None:
    """
    Print the chained build target declarations.

    Each configured target depends on the one declared before it and is always
    stale; a final aggregate target depends on the last one and is built by
    default.
    """
    settings = get_config(repo.resolve())["chain"]
    try:
        targets = build_chain(
            settings["targets"],
            settings["command"],
            settings["aggregate"],
            input=settings["input"],
        )
    except ChainError as e:
        err_console.print(f"ERROR: {e}", style="bold red")
        raise SystemExit(1)
    if fmt == "json":
        print(render_json(targets))
    else:
        print(render_meson(targets), end="")

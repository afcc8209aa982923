"""Tracked-file enumeration for the source repository."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, List, Protocol, Sequence

from ..errors import SourceTreeError
from ..utils import git_output


class TrackedFiles(Protocol):
    """Anything that can list the tracked files under a set of pathspecs."""

    def list_files(self, pathspecs: Sequence[str]) -> List[str]:
        """Return repo-relative POSIX paths of tracked files under `pathspecs`."""
        ...


class GitTrackedFiles:
    """Enumerate files tracked by git in a working tree."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    def list_files(self, pathspecs: Sequence[str]) -> List[str]:
        if not pathspecs:
            return []
        try:
            out = git_output(
                ["ls-files", "-z", "--", *pathspecs], cwd=self.repo_root, strip=False
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            detail = getattr(e, "stderr", None) or str(e)
            raise SourceTreeError(
                f"Unable to list tracked files in {self.repo_root}: {detail.strip()}"
            ) from e
        # -z keeps names with non-ASCII or special characters unquoted
        return [name for name in out.split("\0") if name]


def exclude_matching(files: Iterable[str], patterns: Sequence[str]) -> List[str]:
    """Drop every path that contains any of `patterns` as a substring."""
    return [f for f in files if not any(p in f for p in patterns)]

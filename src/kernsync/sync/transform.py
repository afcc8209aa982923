"""In-memory rewrites applied to manifest files before comparison."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Optional, Sequence

_VERSION_RE = re.compile(r'\bversion\s*=\s*"([^"]*)"')
_PATH_RE = re.compile(r'\bpath\s*=\s*"[^"]*"')


@dataclass(frozen=True)
class TransformRule:
    """Rewrite applied to files whose name equals `filename`."""

    filename: str
    pattern: re.Pattern[str]
    replacement: Callable[[re.Match[str]], str]
    note: str = ""

    def matches(self, path: str) -> bool:
        return PurePosixPath(path).name == self.filename

    def apply(self, content: str) -> str:
        return self.pattern.sub(self.replacement, content)


def drop_dependency_path(dependency: str, filename: str = "Cargo.toml") -> TransformRule:
    """Build the rule that turns a path+version dependency into a plain version.

    The shared utility crate is referenced by path inside the source repository,
    which breaks once the manifest is copied elsewhere:

        scx_utils = { path = "../../rust/scx_utils", version = "1.0.3" }

    becomes

        scx_utils = "1.0.3"

    Lines without both a `path` and a `version` key are left alone, which also
    makes the rule idempotent.
    """
    pattern = re.compile(
        rf"^{re.escape(dependency)}[ \t]*=[ \t]*\{{(?P<body>[^\n]*)\}}[ \t]*(?P<tail>#[^\r\n]*)?(?P<eol>\r?)$",
        re.MULTILINE,
    )

    def _replace(match: re.Match[str]) -> str:
        body = match.group("body")
        version = _VERSION_RE.search(body)
        if version is None or _PATH_RE.search(body) is None:
            return match.group(0)
        return f'{dependency} = "{version.group(1)}"{match.group("eol")}'

    return TransformRule(
        filename=filename,
        pattern=pattern,
        replacement=_replace,
        note=f"dropped path from {dependency} dependency",
    )


def find_rule(path: str, rules: Sequence[TransformRule]) -> Optional[TransformRule]:
    for rule in rules:
        if rule.matches(path):
            return rule
    return None

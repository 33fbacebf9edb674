"""Lockfile path discovery."""

from __future__ import annotations

import glob
from pathlib import Path
from collections.abc import Iterable

from .errors import ConfigurationError

EXCLUDES = {"node_modules", ".git", ".venv"}


def _is_pattern(value: str) -> bool:
    return any(char in value for char in "*?[")


def discover_lockfiles(patterns: Iterable[str]) -> list[Path]:
    """Expand glob patterns and literal paths into an ordered list of lockfiles.

    Glob hits inside vendor directories are skipped; literal paths are kept as
    given so that a missing file surfaces as a parse error.
    """
    found: list[Path] = []
    seen: set[Path] = set()

    def should_skip(p: Path) -> bool:
        return any(ex in p.parts for ex in EXCLUDES)

    for pattern in patterns:
        if not _is_pattern(pattern):
            candidates = [Path(pattern)]
        else:
            candidates = [
                Path(hit)
                for hit in sorted(glob.glob(pattern, recursive=True))
                if Path(hit).is_file() and not should_skip(Path(hit))
            ]
        for path in candidates:
            if path in seen:
                continue
            seen.add(path)
            found.append(path)

    if not found:
        raise ConfigurationError(f"No lockfiles matched: {', '.join(patterns)}")
    return found

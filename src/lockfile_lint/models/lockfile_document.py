"""Parsed lockfile model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from collections.abc import Iterable

from .dependency_record import DependencyRecord


class LockfileType(str, Enum):
    """Lockfile formats understood by the parsers."""

    NPM = "npm"
    YARN = "yarn"


@dataclass(frozen=True)
class LockfileDocument:
    """Immutable, ordered view of the records parsed from one lockfile."""

    path: Path
    type: LockfileType
    records: tuple[DependencyRecord, ...]

    def __len__(self) -> int:
        return len(self.records)

    @classmethod
    def from_records(
        cls, *, path: Path, lockfile_type: LockfileType, records: Iterable[DependencyRecord]
    ) -> LockfileDocument:
        return cls(path=path, type=lockfile_type, records=tuple(records))

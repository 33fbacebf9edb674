"""Lockfile parsers keyed by lockfile type."""

from __future__ import annotations

from pathlib import Path
from collections.abc import Callable

import structlog

from ..errors import ParseError
from ..models import DependencyRecord, LockfileDocument, LockfileType
from .package_lock import parse as parse_package_lock
from .yarn_lock import parse as parse_yarn_lock

log = structlog.get_logger("lockfile_lint.parsers")

ParseFunction = Callable[[Path], list[DependencyRecord]]

LOCKFILE_PARSERS: dict[LockfileType, ParseFunction] = {
    LockfileType.NPM: parse_package_lock,
    LockfileType.YARN: parse_yarn_lock,
}

_FILENAME_TYPES: dict[str, LockfileType] = {
    "package-lock.json": LockfileType.NPM,
    "npm-shrinkwrap.json": LockfileType.NPM,
    "yarn.lock": LockfileType.YARN,
}


def resolve_type(path: Path, declared_type: LockfileType | str | None) -> LockfileType:
    """Return the lockfile type, inferring it from the file name when undeclared."""
    if declared_type is None or declared_type == "":
        inferred = _FILENAME_TYPES.get(path.name)
        if inferred is None:
            raise ParseError(
                f"Unable to infer lockfile type for {path}; declare one of: "
                + ", ".join(t.value for t in LockfileType)
            )
        return inferred
    try:
        return LockfileType(declared_type)
    except ValueError as exc:
        known = ", ".join(t.value for t in LockfileType)
        raise ParseError(f"Unknown lockfile type '{declared_type}'. Known types: {known}") from exc


def parse(path: Path, declared_type: LockfileType | str | None = None) -> LockfileDocument:
    """Parse a lockfile into an immutable document.

    Raises:
        ParseError: if the type is unknown or the file is malformed.
    """
    path = Path(path)
    lockfile_type = resolve_type(path, declared_type)
    records = LOCKFILE_PARSERS[lockfile_type](path)
    log.debug("lockfile.parsed", path=str(path), type=lockfile_type.value, records=len(records))
    return LockfileDocument.from_records(path=path, lockfile_type=lockfile_type, records=records)


__all__ = [
    "LOCKFILE_PARSERS",
    "parse",
    "resolve_type",
]

"""Parse yarn.lock (yarn classic, lockfile v1) into dependency records."""

from __future__ import annotations

from pathlib import Path

from ..errors import ParseError
from ..models import DependencyRecord
from .specifiers import parse_alias, split_specifier, unquote

_FIELDS = {"version", "resolved", "integrity"}


def _record_from_header(header: str, lineno: int) -> tuple[str, str | None]:
    """Return ``(name, alias_of)`` from an entry header such as ``a@^1, a@^1.2``."""
    first = unquote(header.split(",", 1)[0])
    name, reference = split_specifier(first)
    if not name:
        raise ParseError(f"line {lineno}: entry header {header!r} has no package name")
    alias = parse_alias(reference)
    return name, alias[0] if alias else None


def parse(path: Path) -> list[DependencyRecord]:
    """Return the records of a yarn lockfile in file order."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise ParseError(f"Failed to read yarn lockfile {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"yarn lockfile {path} is not valid UTF-8: {exc}") from exc

    records: list[DependencyRecord] = []
    current: dict[str, str] | None = None

    def flush() -> None:
        if current is not None:
            records.append(
                DependencyRecord(
                    name=current["name"],
                    version=current.get("version"),
                    resolved_url=current.get("resolved"),
                    integrity=current.get("integrity"),
                    alias_of=current.get("alias_of"),
                )
            )

    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip()
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if not line.startswith(" "):
            if stripped == "__metadata:":
                raise ParseError(f"{path}: yarn berry lockfiles are not supported")
            if not line.endswith(":"):
                raise ParseError(f"{path}: line {lineno}: expected an entry header, got {line!r}")
            flush()
            name, alias_of = _record_from_header(line[:-1], lineno)
            current = {"name": name}
            if alias_of:
                current["alias_of"] = alias_of
            continue

        if current is None:
            raise ParseError(f"{path}: line {lineno}: field outside of any entry")

        indent = len(line) - len(line.lstrip(" "))
        if indent != 2 or stripped.endswith(":"):
            # nested blocks such as "dependencies:" and their children
            continue

        key, _, value = stripped.partition(" ")
        key = unquote(key)
        if key in _FIELDS:
            current[key] = unquote(value)

    flush()
    return records

"""Parse npm package-lock.json / npm-shrinkwrap.json into dependency records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import ParseError
from ..models import DependencyRecord
from .specifiers import parse_alias

_NODE_MODULES = "node_modules/"


def parse(path: Path) -> list[DependencyRecord]:
    """Return the records of an npm lockfile in file order.

    Supports npm v2+ ("packages" map), falling back to the v1
    ("dependencies" tree) format.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ParseError(f"Failed to read npm lockfile {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"npm lockfile {path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON in npm lockfile {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(f"npm lockfile {path} must contain a JSON object")

    packages = data.get("packages")
    if isinstance(packages, dict):
        return _parse_packages(packages)

    deps = data.get("dependencies")
    if isinstance(deps, dict):
        records: list[DependencyRecord] = []
        _flatten_dependencies(deps, records)
        return records

    if packages is not None or deps is not None:
        raise ParseError(f"npm lockfile {path} has malformed 'packages' or 'dependencies'")
    return []


def _optional_str(meta: dict[str, Any], key: str) -> str | None:
    value = meta.get(key)
    if value is None:
        return None
    return str(value)


def _parse_packages(packages: dict[str, Any]) -> list[DependencyRecord]:
    records: list[DependencyRecord] = []
    for key, meta in packages.items():
        # "" is the root project itself
        if not key or not isinstance(meta, dict):
            continue

        declared_name = _optional_str(meta, "name")
        alias_of: str | None = None
        if _NODE_MODULES in key:
            name = key.rsplit(_NODE_MODULES, 1)[1].rstrip("/")
            if not name:
                raise ParseError(f"npm lockfile entry {key!r} has no package name")
            if declared_name and declared_name != name:
                alias_of = declared_name
        else:
            # workspace folder entries are keyed by their relative path
            name = declared_name or key.rstrip("/").rsplit("/", 1)[-1]
            if not name or name in {".", ".."}:
                raise ParseError(f"npm lockfile entry {key!r} has no package name")

        resolved = None if meta.get("link") else _optional_str(meta, "resolved")
        records.append(
            DependencyRecord(
                name=name,
                version=_optional_str(meta, "version"),
                resolved_url=resolved,
                integrity=_optional_str(meta, "integrity"),
                alias_of=alias_of,
            )
        )
    return records


def _flatten_dependencies(deps: dict[str, Any], records: list[DependencyRecord]) -> None:
    for name, meta in deps.items():
        if not isinstance(meta, dict):
            continue
        if not name:
            raise ParseError("npm lockfile has a dependency with an empty name")

        version = _optional_str(meta, "version")
        alias_of: str | None = None
        if version:
            alias = parse_alias(version)
            if alias is not None:
                alias_of, version = alias[0], alias[1] or None

        records.append(
            DependencyRecord(
                name=name,
                version=version,
                resolved_url=_optional_str(meta, "resolved"),
                integrity=_optional_str(meta, "integrity"),
                alias_of=alias_of,
            )
        )

        nested = meta.get("dependencies")
        if isinstance(nested, dict):
            _flatten_dependencies(nested, records)

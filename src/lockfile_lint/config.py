"""Configuration loader for lockfile linting.

Settings come from an optional config file (JSON or YAML, or the
``lockfile-lint`` key of ``package.json``) merged with command-line options,
which take precedence. The merged mapping is validated against
``CONFIG_SCHEMA`` before it is turned into a :class:`Settings` object.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from collections.abc import Iterable, Mapping

import structlog
import yaml
from jsonschema import Draft202012Validator

from .errors import ConfigurationError
from .models import LockfileType

log = structlog.get_logger("lockfile_lint.config")

CONFIG_PATH_ENV_VAR = "LOCKFILE_LINT_CONFIG"
PACKAGE_JSON_KEY = "lockfile-lint"
CONFIG_FILENAMES = (
    ".lockfile-lintrc",
    ".lockfile-lintrc.json",
    ".lockfile-lintrc.yaml",
    ".lockfile-lintrc.yml",
    "package.json",
)
OUTPUT_FORMATS = ("pretty", "plain", "json")

_STRING_LIST = {
    "anyOf": [
        {"type": "string", "minLength": 1},
        {"type": "array", "items": {"type": "string", "minLength": 1}},
    ]
}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "path": {
            "anyOf": [
                {"type": "string", "minLength": 1},
                {"type": "array", "items": {"type": "string", "minLength": 1}, "minItems": 1},
            ]
        },
        "type": {"enum": [t.value for t in LockfileType]},
        "format": {"enum": list(OUTPUT_FORMATS)},
        "empty-hostname": {"type": "boolean"},
        "validate-https": {"type": "boolean"},
        "validate-package-names": {"type": "boolean"},
        "validate-integrity": {"type": "boolean"},
        "allowed-hosts": _STRING_LIST,
        "allowed-schemes": _STRING_LIST,
        "allowed-urls": _STRING_LIST,
        "allowed-package-name-aliases": _STRING_LIST,
        "integrity-exclude": _STRING_LIST,
    },
    "required": ["path"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration consumed by the lint engine."""

    path: tuple[str, ...]
    type: LockfileType | None = None
    format: str = "pretty"
    empty_hostname: bool = True
    allowed_hosts: tuple[str, ...] = ()
    allowed_schemes: tuple[str, ...] = ()
    allowed_urls: tuple[str, ...] = ()
    allowed_package_name_aliases: tuple[str, ...] = ()
    integrity_exclude: tuple[str, ...] = ()
    validate_https: bool = False
    validate_package_names: bool = False
    validate_integrity: bool = False

    def get(self, key: str) -> Any:
        """Return an option by its kebab-case configuration key."""
        return getattr(self, key.replace("-", "_"))

    @property
    def is_pretty(self) -> bool:
        return self.format == "pretty"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """Build settings from an already validated kebab-case mapping."""
        lockfile_type = data.get("type")
        return cls(
            path=_as_tuple(data["path"]),
            type=LockfileType(lockfile_type) if lockfile_type else None,
            format=data.get("format", "pretty"),
            empty_hostname=data.get("empty-hostname", True),
            allowed_hosts=_as_tuple(data.get("allowed-hosts")),
            allowed_schemes=_as_tuple(data.get("allowed-schemes")),
            allowed_urls=_as_tuple(data.get("allowed-urls")),
            allowed_package_name_aliases=_as_tuple(data.get("allowed-package-name-aliases")),
            integrity_exclude=_as_tuple(data.get("integrity-exclude")),
            validate_https=data.get("validate-https", False),
            validate_package_names=data.get("validate-package-names", False),
            validate_integrity=data.get("validate-integrity", False),
        )


def _as_tuple(value: str | Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def to_kebab_case(key: str) -> str:
    """Normalise ``allowedHosts`` / ``allowed_hosts`` to ``allowed-hosts``."""
    key = re.sub(r"(?<!^)(?=[A-Z])", "-", key).lower()
    return key.replace("_", "-")


def normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {to_kebab_case(str(key)): value for key, value in data.items()}


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_config(data: Mapping[str, Any]) -> None:
    """Validate a merged configuration mapping against ``CONFIG_SCHEMA``.

    Raises:
        ConfigurationError: listing every violation found.
    """
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(dict(data)), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigurationError("Invalid configuration:\n" + _format_errors(errors))


def _resolve_config_path(path: Path | str | None, cwd: Path) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. LOCKFILE_LINT_CONFIG environment variable
    3. First known config file in the working directory
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    for name in CONFIG_FILENAMES:
        candidate = cwd / name
        if not candidate.is_file():
            continue
        if name == "package.json":
            data = _read_json(candidate)
            if not isinstance(data, dict) or PACKAGE_JSON_KEY not in data:
                continue
        return candidate
    return None


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Failed to read configuration file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in configuration file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"Configuration file {path} is not valid UTF-8: {exc}") from exc


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Failed to read configuration file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"Configuration file {path} is not valid UTF-8: {exc}") from exc


def load_config_file(path: Path) -> dict[str, Any]:
    """Load one configuration file and return its kebab-case options."""
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    if path.name == "package.json":
        data = _read_json(path)
        data = data.get(PACKAGE_JSON_KEY) if isinstance(data, dict) else None
    elif path.suffix == ".json":
        data = _read_json(path)
    else:
        data = _read_yaml(path)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be an object")
    return normalise_keys(data)


def load_settings(
    cli_options: Mapping[str, Any] | None = None,
    config_path: Path | str | None = None,
    cwd: Path | None = None,
) -> Settings:
    """Merge config-file and command-line options into validated settings.

    Args:
        cli_options: options given on the command line; these override the file.
        config_path: optional explicit config file. If not provided, uses the
            LOCKFILE_LINT_CONFIG env var or searches the working directory.
        cwd: directory searched for config files (default: current directory).

    Raises:
        ConfigurationError: if a file cannot be read or the result is invalid.
    """
    resolved = _resolve_config_path(config_path, cwd or Path.cwd())

    merged: dict[str, Any] = {}
    if resolved is not None:
        merged.update(load_config_file(resolved))
        log.debug("config.file_loaded", path=str(resolved))
    merged.update(normalise_keys(cli_options or {}))

    validate_config(merged)
    settings = Settings.from_mapping(merged)
    log.debug("config.resolved", options=sorted(merged))
    return settings

"""Helpers for npm-style ``name@range`` dependency specifiers.

Handles scoped names (``@scope/name@^1.0.0``) and npm aliases
(``alias@npm:real-name@^1.0.0``).
"""

from __future__ import annotations

ALIAS_PROTOCOL = "npm:"


def split_specifier(specifier: str) -> tuple[str, str]:
    """Split ``name@range`` into ``(name, range)``; range is empty if absent."""
    specifier = specifier.strip()
    start = 1 if specifier.startswith("@") else 0
    idx = specifier.find("@", start)
    if idx == -1:
        return specifier, ""
    return specifier[:idx], specifier[idx + 1 :]


def parse_alias(reference: str) -> tuple[str, str] | None:
    """Return ``(real_name, version_or_range)`` for ``npm:real@x`` references."""
    if not reference.startswith(ALIAS_PROTOCOL):
        return None
    real, version = split_specifier(reference[len(ALIAS_PROTOCOL) :])
    if not real:
        return None
    return real, version


def unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value

"""Human-readable rendering of lint results."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from collections.abc import Mapping

from .models import RunSummary

RESET = "\x1b[0m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"

SYMBOLS_DEFAULT = {"info": "ℹ", "success": "✔", "error": "✖"}
SYMBOLS_FALLBACK = {"info": "i", "success": "√", "error": "×"}


def symbols_supported(platform: str | None = None, environ: Mapping[str, str] | None = None) -> bool:
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    return platform != "win32" or bool(environ.get("CI")) or environ.get("TERM") == "xterm-256color"


@dataclass(frozen=True)
class Styler:
    """Decorates status lines with color and symbols in pretty mode."""

    pretty: bool
    symbols: Mapping[str, str]

    @classmethod
    def create(cls, pretty: bool) -> Styler:
        symbols = SYMBOLS_DEFAULT if symbols_supported() else SYMBOLS_FALLBACK
        return cls(pretty=pretty, symbols=symbols)

    def _line(self, color: str, kind: str, message: str) -> str:
        if not self.pretty:
            return message
        return f"{color}{self.symbols[kind]} {message}{RESET}"

    def success(self, message: str) -> str:
        return self._line(GREEN, "success", message)

    def warn(self, message: str) -> str:
        return self._line(YELLOW, "info", message)

    def error(self, message: str) -> str:
        return self._line(RED, "error", message)


def render_summary(summary: RunSummary, styler: Styler) -> str:
    """Return the issues of every failed validator followed by the verdict."""
    lines: list[str] = []
    for outcome in summary.failed_outcomes:
        for issue in outcome.issues:
            lines.append(styler.error(issue.message))
        lines.append("")

    if summary.validator_failures:
        lines.append(styler.error("Error: security issues detected!"))
    else:
        lines.append(styler.success("No issues detected"))
    return "\n".join(lines) + "\n"


def render_scan_header(path: str) -> str:
    return f"\nlockfile-lint scanning: {path}\n"

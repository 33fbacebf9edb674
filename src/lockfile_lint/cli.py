"""Command-line entrypoint for linting lockfiles.

Usage:
  lockfile-lint --path yarn.lock --allowed-hosts npm yarn --validate-https
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from .config import OUTPUT_FORMATS, load_settings
from .core import lint
from .discovery import discover_lockfiles
from .errors import ConfigurationError, LockfileLintError
from .logging import setup_logging
from .models import LockfileType, RunSummary
from .registry import build_validator_specs
from .report import EXIT_FATAL, aggregate, exit_status
from .summary import Styler, render_scan_header, render_summary

log = structlog.get_logger("lockfile_lint.cli")


def _str_to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "y"}:
        return True
    if lowered in {"0", "false", "no", "n"}:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lockfile-lint",
        description="Lint lockfiles for improved security and trust policies.",
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument("-p", "--path", nargs="+", help="path or glob pattern of lockfiles")
    parser.add_argument("-t", "--type", choices=[t.value for t in LockfileType])
    parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS)
    parser.add_argument("-c", "--config", type=Path, help="path to a configuration file")
    parser.add_argument("-s", "--validate-https", action="store_true")
    parser.add_argument("-a", "--allowed-hosts", nargs="+", help="allowed hosts or registry shortcuts")
    parser.add_argument("-o", "--allowed-schemes", nargs="+", help='allowed URI schemes such as "https:"')
    parser.add_argument("-u", "--allowed-urls", nargs="+")
    parser.add_argument("-e", "--empty-hostname", type=_str_to_bool)
    parser.add_argument("-n", "--validate-package-names", action="store_true")
    parser.add_argument("-i", "--validate-integrity", action="store_true")
    parser.add_argument("--integrity-exclude", nargs="+")
    parser.add_argument("--allowed-package-name-aliases", nargs="+")
    return parser


def parse_args(argv: list[str] | None = None) -> tuple[dict[str, Any], Path | None]:
    """Return the explicitly given options (kebab-case) and the config path."""
    namespace = vars(build_parser().parse_args(argv))
    config_path = namespace.pop("config", None)
    options = {key.replace("_", "-"): value for key, value in namespace.items()}
    return options, config_path


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    options, config_path = parse_args(argv)

    try:
        settings = load_settings(options, config_path)
        validators = build_validator_specs(settings)
        paths = discover_lockfiles(settings.path)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_FATAL

    log.debug("cli.options_parsed", paths=[str(p) for p in paths], validators=len(validators))

    styler = Styler.create(pretty=settings.is_pretty)
    as_json = settings.format == "json"
    summaries: list[RunSummary] = []

    try:
        for summary in lint(settings, paths, validators):
            summaries.append(summary)
            if as_json:
                continue
            if len(paths) > 1:
                print(render_scan_header(str(summary.path)))
            # failures go to stderr
            stream = sys.stderr if summary.validator_failures else sys.stdout
            print(render_summary(summary, styler), file=stream)
    except LockfileLintError as exc:
        print(styler.warn("ABORTING lockfile lint process due to error exceptions"), file=sys.stderr)
        print(f"{exc}\n", file=sys.stderr)
        print(styler.error(f"Error: command failed with exit code {EXIT_FATAL}"), file=sys.stderr)
        return EXIT_FATAL

    if as_json:
        print(json.dumps(aggregate(summaries), indent=2))

    return exit_status(summaries)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

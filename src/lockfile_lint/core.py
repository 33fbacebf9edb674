"""Core lint entrypoints.

This module holds no I/O beyond reading lockfiles and never exits the
process, so it can be driven by the CLI or embedded in other tooling.
"""

from __future__ import annotations

from pathlib import Path
from collections.abc import Iterable, Iterator, Sequence

import structlog

from .config import Settings
from .errors import InternalValidatorError
from .models import LockfileDocument, LockfileType, RunSummary, ValidationOutcome, ValidatorSpec
from .parsers import parse
from .registry import build_validator_specs, get_validator

log = structlog.get_logger("lockfile_lint.core")


def _run_one(document: LockfileDocument, spec: ValidatorSpec) -> ValidationOutcome:
    validator = get_validator(spec.name)
    try:
        outcome = validator(document.records, spec)
    except Exception as exc:
        raise InternalValidatorError(
            f"Validator {spec.name.value} failed on {document.path}: {exc}"
        ) from exc

    log.debug(
        "lint.validator_completed",
        path=str(document.path),
        validator=spec.name.value,
        passed=outcome.passed,
        issues=len(outcome.issues),
    )
    return outcome


def run_validators(
    path: Path | str,
    lockfile_type: LockfileType | str | None,
    validators: Sequence[ValidatorSpec],
) -> RunSummary:
    """Parse one lockfile and run each validator over it, in the order given.

    Raises:
        ParseError: if the lockfile cannot be parsed.
        InternalValidatorError: if a validator fails unexpectedly.
    """
    document = parse(Path(path), lockfile_type)
    outcomes = tuple(_run_one(document, spec) for spec in validators)
    summary = RunSummary(path=document.path, lockfile_type=document.type, outcomes=outcomes)

    log.info(
        "lint.run_completed",
        path=str(document.path),
        validators=summary.validator_count,
        successes=summary.validator_successes,
        failures=summary.validator_failures,
    )
    return summary


def lint(
    settings: Settings,
    paths: Iterable[Path],
    validators: Sequence[ValidatorSpec] | None = None,
) -> Iterator[RunSummary]:
    """Lint each lockfile path in turn, yielding one summary per path.

    ``validators`` defaults to the specs built from ``settings``.
    """
    if validators is None:
        validators = build_validator_specs(settings)
    for path in paths:
        yield run_validators(path, settings.type, validators)

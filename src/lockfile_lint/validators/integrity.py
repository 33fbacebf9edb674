"""Integrity-hash format policy."""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..models import DependencyRecord, Policy, ValidationIssue, ValidationOutcome, ValidatorSpec

ALLOWED_ALGORITHMS = frozenset({"sha512"})
_SRI_RE = re.compile(r"^(?P<algorithm>[a-z0-9]+)-(?P<digest>[A-Za-z0-9+/]+={0,2})$")


def is_valid_integrity(value: str | None) -> bool:
    """Return True when every hash in ``value`` is an allowed, well-formed SRI hash."""
    if not value or not value.strip():
        return False
    for token in value.split():
        match = _SRI_RE.match(token)
        if match is None or match.group("algorithm") not in ALLOWED_ALGORITHMS:
            return False
    return True


def validate_integrity(records: Sequence[DependencyRecord], spec: ValidatorSpec) -> ValidationOutcome:
    excluded = set(spec.options.integrity_exclude)
    issues: list[ValidationIssue] = []

    for record in records:
        # nothing was fetched, so nothing to verify
        if record.resolved_url is None:
            continue
        if record.name in excluded or record.real_name in excluded:
            continue
        if not is_valid_integrity(record.integrity):
            issues.append(
                ValidationIssue(
                    record,
                    f"detected invalid integrity hash type for package: {record.label}\n"
                    f"    expected: {', '.join(sorted(ALLOWED_ALGORITHMS))}\n"
                    f"    actual: {record.integrity or '(missing)'}",
                )
            )

    return ValidationOutcome.from_issues(Policy.INTEGRITY, issues)

"""Allowed-schemes policy."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import DependencyRecord, Policy, ValidationIssue, ValidationOutcome, ValidatorSpec
from ..urls import normalise_scheme, parse_url


def validate_schemes(records: Sequence[DependencyRecord], spec: ValidatorSpec) -> ValidationOutcome:
    allowed = {normalise_scheme(s) for s in spec.allowed_values}
    issues: list[ValidationIssue] = []

    for record in records:
        if record.resolved_url is None:
            continue
        url = parse_url(record.resolved_url)
        if url is None:
            issues.append(
                ValidationIssue(
                    record,
                    f"detected unparseable URL for package {record.label}: {record.resolved_url}",
                )
            )
        elif url.scheme not in allowed:
            issues.append(
                ValidationIssue(
                    record,
                    f"detected invalid scheme(s) for package: {record.label}\n"
                    f"    expected: {', '.join(sorted(allowed))}\n"
                    f"    actual: {url.scheme}",
                )
            )

    return ValidationOutcome.from_issues(Policy.SCHEMES, issues)

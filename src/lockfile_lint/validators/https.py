"""HTTPS-only policy."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import DependencyRecord, Policy, ValidationIssue, ValidationOutcome, ValidatorSpec
from ..urls import normalise_scheme, parse_url

HTTPS = "https"


def validate_https(records: Sequence[DependencyRecord], spec: ValidatorSpec) -> ValidationOutcome:
    allowed = {HTTPS} | {normalise_scheme(s) for s in spec.options.allowed_schemes}
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
                    f"detected invalid protocol for package: {record.label}\n"
                    f"    expected: {HTTPS}\n"
                    f"    actual: {url.scheme}",
                )
            )

    return ValidationOutcome.from_issues(Policy.HTTPS, issues)

"""Allowed-urls policy."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import DependencyRecord, Policy, ValidationIssue, ValidationOutcome, ValidatorSpec


def validate_urls(records: Sequence[DependencyRecord], spec: ValidatorSpec) -> ValidationOutcome:
    """Require every resolved URL to appear verbatim in the allow-list."""
    allowed = set(spec.allowed_values)
    issues = [
        ValidationIssue(
            record,
            f"detected invalid url(s) for package: {record.label}\n"
            f"    actual: {record.resolved_url}",
        )
        for record in records
        if record.resolved_url is not None and record.resolved_url not in allowed
    ]
    return ValidationOutcome.from_issues(Policy.URLS, issues)

"""Allowed-hosts policy."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import DependencyRecord, Policy, ValidationIssue, ValidationOutcome, ValidatorSpec
from ..urls import expand_hosts, parse_url


def validate_hosts(records: Sequence[DependencyRecord], spec: ValidatorSpec) -> ValidationOutcome:
    """Check every resolved URL's host against the allowed hosts.

    URLs listed in ``options.allowed_urls`` always pass. Missing URLs and URLs
    without a host are tolerated only while ``options.empty_hostname`` is set;
    a URL that cannot be parsed at all is always reported.
    """
    allowed = expand_hosts(spec.allowed_values)
    allowed_urls = set(spec.options.allowed_urls)
    empty_ok = spec.options.empty_hostname
    issues: list[ValidationIssue] = []

    for record in records:
        if record.resolved_url is None:
            if not empty_ok:
                issues.append(ValidationIssue(record, f"package {record.label} has no resolved URL"))
            continue

        if record.resolved_url in allowed_urls:
            continue

        url = parse_url(record.resolved_url)
        if url is None:
            issues.append(
                ValidationIssue(
                    record,
                    f"detected unparseable URL for package {record.label}: {record.resolved_url}",
                )
            )
            continue

        if not url.host:
            if not empty_ok:
                issues.append(
                    ValidationIssue(
                        record,
                        f"detected empty hostname for package {record.label}: {record.resolved_url}",
                    )
                )
            continue

        if url.host not in allowed:
            issues.append(
                ValidationIssue(
                    record,
                    f"detected invalid host(s) for package: {record.label}\n"
                    f"    expected: {', '.join(sorted(allowed))}\n"
                    f"    actual: {url.host}",
                )
            )

    return ValidationOutcome.from_issues(Policy.HOSTS, issues)

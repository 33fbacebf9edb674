"""Package-name policy.

Checks each record's name (and alias target) against npm's package name
grammar, restricts aliases to a configured allow-list, and verifies that
tarballs served by the public registries belong to the package that claims
them.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..models import DependencyRecord, Policy, ValidationIssue, ValidationOutcome, ValidatorSpec
from ..urls import parse_url, registry_package_name

MAX_NAME_LENGTH = 214
_BLOCKED_NAMES = {"node_modules", "favicon.ico"}
# characters that survive encodeURIComponent unchanged
_URL_SAFE = r"[A-Za-z0-9\-_.!~*'()]+"
_NAME_RE = re.compile(rf"^(?:@{_URL_SAFE}/)?{_URL_SAFE}$")


def name_problems(name: str) -> list[str]:
    """Return the reasons ``name`` is not a legal npm package name."""
    problems: list[str] = []
    if name != name.strip():
        problems.append("name cannot contain leading or trailing spaces")
    if len(name) > MAX_NAME_LENGTH:
        problems.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.startswith("."):
        problems.append("name cannot start with a period")
    if name.startswith("_"):
        problems.append("name cannot start with an underscore")
    if name.lower() in _BLOCKED_NAMES:
        problems.append(f"{name} is a blocked name")
    if not _NAME_RE.match(name):
        problems.append("name can only contain URL-friendly characters")
    return problems


def _alias_allowed(record: DependencyRecord, target: str, allowed: set[str]) -> bool:
    return target in allowed or f"{record.name}:{target}" in allowed


def validate_package_names(
    records: Sequence[DependencyRecord], spec: ValidatorSpec
) -> ValidationOutcome:
    allowed_aliases = set(spec.options.allowed_package_name_aliases)
    issues: list[ValidationIssue] = []

    for record in records:
        for candidate in filter(None, (record.name, record.alias_of)):
            problems = name_problems(candidate)
            if problems:
                issues.append(
                    ValidationIssue(
                        record,
                        f"detected invalid package name: {candidate}\n    " + "\n    ".join(problems),
                    )
                )
                break
        else:
            issue = _alias_issue(record, allowed_aliases) or _registry_issue(record, allowed_aliases)
            if issue is not None:
                issues.append(issue)

    return ValidationOutcome.from_issues(Policy.PACKAGE_NAMES, issues)


def _alias_issue(record: DependencyRecord, allowed: set[str]) -> ValidationIssue | None:
    if record.alias_of is None or not allowed:
        return None
    if _alias_allowed(record, record.alias_of, allowed):
        return None
    return ValidationIssue(
        record,
        f"detected disallowed package name alias: {record.name} -> {record.alias_of}",
    )


def _registry_issue(record: DependencyRecord, allowed: set[str]) -> ValidationIssue | None:
    if record.resolved_url is None:
        return None
    url = parse_url(record.resolved_url)
    if url is None:
        return None
    expected = registry_package_name(url)
    if expected is None or expected == record.real_name:
        return None
    if _alias_allowed(record, expected, allowed):
        return None
    return ValidationIssue(
        record,
        f"detected resolved URL for package with a different name: {record.label}\n"
        f"    expected: {expected}\n"
        f"    actual: {record.real_name}",
    )

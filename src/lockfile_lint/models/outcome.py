"""Validation outcomes and per-lockfile run summaries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from collections.abc import Iterable

from .dependency_record import DependencyRecord
from .lockfile_document import LockfileType
from .validator_spec import Policy


@dataclass(frozen=True)
class ValidationIssue:
    """A record that violated a policy, with a human readable reason."""

    record: DependencyRecord
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"package": self.record.to_dict(), "message": self.message}


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of running one validator over a lockfile's records."""

    validator_name: Policy
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.issues

    @property
    def offending_records(self) -> tuple[DependencyRecord, ...]:
        return tuple(issue.record for issue in self.issues)

    def to_dict(self) -> dict[str, object]:
        return {
            "validator": self.validator_name.value,
            "passed": self.passed,
            "issues": [issue.to_dict() for issue in self.issues],
        }

    @classmethod
    def from_issues(cls, policy: Policy, issues: Iterable[ValidationIssue]) -> ValidationOutcome:
        return cls(validator_name=policy, issues=tuple(issues))


@dataclass(frozen=True)
class RunSummary:
    """Aggregate of every validator outcome for a single lockfile."""

    path: Path
    lockfile_type: LockfileType
    outcomes: tuple[ValidationOutcome, ...]

    @property
    def validator_count(self) -> int:
        return len(self.outcomes)

    @property
    def validator_successes(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def validator_failures(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.passed)

    @property
    def failed_outcomes(self) -> list[ValidationOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "type": self.lockfile_type.value,
            "validatorCount": self.validator_count,
            "validatorSuccesses": self.validator_successes,
            "validatorFailures": self.validator_failures,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }

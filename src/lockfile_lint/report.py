"""Report aggregation, machine-readable output and exit status."""

from __future__ import annotations

from typing import Any
from collections.abc import Sequence

from .models import RunSummary

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2


def aggregate(summaries: Sequence[RunSummary]) -> dict[str, Any]:
    """Aggregate per-lockfile summaries into a single JSON-friendly report."""

    total_failures = sum(s.validator_failures for s in summaries)

    report: dict[str, Any] = {
        "version": "1",
        "hasFindings": total_failures > 0,
        "lockfiles": [summary.to_dict() for summary in summaries],
        "totals": {
            "lockfiles": len(summaries),
            "validators": sum(s.validator_count for s in summaries),
            "successes": sum(s.validator_successes for s in summaries),
            "failures": total_failures,
        },
    }

    return report


def exit_status(summaries: Sequence[RunSummary]) -> int:
    if any(summary.validator_failures for summary in summaries):
        return EXIT_FINDINGS
    return EXIT_OK

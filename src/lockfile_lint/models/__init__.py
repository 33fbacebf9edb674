"""Data models for lockfile parsing and validation."""

from __future__ import annotations

from .dependency_record import DependencyRecord
from .lockfile_document import LockfileDocument, LockfileType
from .outcome import RunSummary, ValidationIssue, ValidationOutcome
from .validator_spec import Policy, ValidatorOptions, ValidatorSpec

__all__ = [
    "DependencyRecord",
    "LockfileDocument",
    "LockfileType",
    "Policy",
    "RunSummary",
    "ValidationIssue",
    "ValidationOutcome",
    "ValidatorOptions",
    "ValidatorSpec",
]

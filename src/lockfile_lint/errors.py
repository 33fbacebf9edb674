"""Fatal error types raised by the lint engine."""

from __future__ import annotations


class LockfileLintError(RuntimeError):
    """Base error for failures that abort a lint run."""


class ConfigurationError(LockfileLintError):
    """Raised when the configuration is invalid or contradictory."""


class ParseError(LockfileLintError):
    """Raised when a lockfile cannot be parsed as its declared type."""


class InternalValidatorError(LockfileLintError):
    """Raised when a validator fails unexpectedly while checking records."""

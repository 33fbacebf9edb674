"""Built-in validators, one pure function per policy."""

from __future__ import annotations

from .hosts import validate_hosts
from .https import validate_https
from .integrity import validate_integrity
from .package_names import validate_package_names
from .schemes import validate_schemes
from .urls import validate_urls

__all__ = [
    "validate_hosts",
    "validate_https",
    "validate_integrity",
    "validate_package_names",
    "validate_schemes",
    "validate_urls",
]

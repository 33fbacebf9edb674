"""Configured validator work units."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Policy(str, Enum):
    """Built-in validation policies."""

    HOSTS = "validateHosts"
    HTTPS = "validateHttps"
    PACKAGE_NAMES = "ValidatePackageNames"
    SCHEMES = "validateSchemes"
    URLS = "validateUrls"
    INTEGRITY = "validateIntegrity"


@dataclass(frozen=True)
class ValidatorOptions:
    """Cross-cutting settings visible to every validator."""

    empty_hostname: bool = True
    allowed_hosts: tuple[str, ...] = ()
    allowed_urls: tuple[str, ...] = ()
    allowed_schemes: tuple[str, ...] = ()
    allowed_package_name_aliases: tuple[str, ...] = ()
    integrity_exclude: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidatorSpec:
    """A single configured policy: which validator to run and with what values.

    ``values`` holds the policy's allow-list, or ``True`` for flag policies
    such as ``validate-https``.
    """

    name: Policy
    values: tuple[str, ...] | bool = True
    options: ValidatorOptions = field(default_factory=ValidatorOptions)

    def __post_init__(self) -> None:
        if not isinstance(self.name, Policy):
            raise ValueError(f"Unknown validator: {self.name!r}")
        if isinstance(self.values, list):
            object.__setattr__(self, "values", tuple(self.values))

    @property
    def allowed_values(self) -> tuple[str, ...]:
        if isinstance(self.values, bool):
            return ()
        return self.values

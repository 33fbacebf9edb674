"""Validator registry: maps configuration keys to built-in policies.

The policy set is closed, so dispatch is a fixed mapping from configuration
key to :class:`Policy` and from :class:`Policy` to validator function.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeAlias
from collections.abc import Callable, Sequence

from .errors import ConfigurationError
from .models import DependencyRecord, Policy, ValidationOutcome, ValidatorOptions, ValidatorSpec
from .validators import (
    validate_hosts,
    validate_https,
    validate_integrity,
    validate_package_names,
    validate_schemes,
    validate_urls,
)

if TYPE_CHECKING:
    from .config import Settings

ValidatorFunction: TypeAlias = Callable[[Sequence[DependencyRecord], ValidatorSpec], ValidationOutcome]

# Configuration key -> policy, in execution order.
SUPPORTED_VALIDATORS: dict[str, Policy] = {
    "allowed-hosts": Policy.HOSTS,
    "validate-https": Policy.HTTPS,
    "validate-package-names": Policy.PACKAGE_NAMES,
    "allowed-schemes": Policy.SCHEMES,
    "allowed-urls": Policy.URLS,
    "validate-integrity": Policy.INTEGRITY,
}

VALIDATORS: dict[Policy, ValidatorFunction] = {
    Policy.HOSTS: validate_hosts,
    Policy.HTTPS: validate_https,
    Policy.PACKAGE_NAMES: validate_package_names,
    Policy.SCHEMES: validate_schemes,
    Policy.URLS: validate_urls,
    Policy.INTEGRITY: validate_integrity,
}


def get_validator(policy: Policy | str) -> ValidatorFunction:
    """Return the validator for ``policy``, or raise ConfigurationError."""
    try:
        return VALIDATORS[Policy(policy)]
    except (KeyError, ValueError):
        known = ", ".join(p.value for p in Policy)
        raise ConfigurationError(f"Unknown validator '{policy}'. Known validators: {known}") from None


def urls_subsumed_by_hosts(settings: Settings) -> bool:
    """Allowed-hosts checking also honours allowed URLs, so the URL policy is redundant."""
    return bool(settings.allowed_hosts)


def build_options(settings: Settings) -> ValidatorOptions:
    return ValidatorOptions(
        empty_hostname=settings.empty_hostname,
        allowed_hosts=settings.allowed_hosts,
        allowed_urls=settings.allowed_urls,
        allowed_schemes=settings.allowed_schemes,
        allowed_package_name_aliases=settings.allowed_package_name_aliases,
        integrity_exclude=settings.integrity_exclude,
    )


def _spec_values(value: Any) -> tuple[str, ...] | bool:
    if isinstance(value, bool):
        return value
    return tuple(value)


def build_validator_specs(settings: Settings) -> list[ValidatorSpec]:
    """Return one spec per enabled policy, in registry order.

    Raises:
        ConfigurationError: if no policy is enabled.
    """
    options = build_options(settings)
    specs: list[ValidatorSpec] = []
    for key, policy in SUPPORTED_VALIDATORS.items():
        if policy is Policy.URLS and urls_subsumed_by_hosts(settings):
            continue
        value = settings.get(key)
        if not value:
            continue
        specs.append(ValidatorSpec(name=policy, values=_spec_values(value), options=options))

    if not specs:
        raise ConfigurationError(
            "No validators enabled. Enable at least one of: " + ", ".join(SUPPORTED_VALIDATORS)
        )
    return specs

import pytest

from lockfile_lint.config import Settings
from lockfile_lint.errors import ConfigurationError
from lockfile_lint.models import Policy
from lockfile_lint.registry import VALIDATORS, build_validator_specs, get_validator
from lockfile_lint.validators import validate_hosts


def _settings(**kw) -> Settings:
    return Settings(path=("yarn.lock",), **kw)


def test_build_specs_follows_registry_order_and_shares_options() -> None:
    settings = _settings(
        validate_integrity=True,
        allowed_schemes=("https:",),
        validate_https=True,
        empty_hostname=False,
    )
    specs = build_validator_specs(settings)

    assert [s.name for s in specs] == [Policy.HTTPS, Policy.SCHEMES, Policy.INTEGRITY]
    assert specs[1].values == ("https:",)
    assert specs[0].values is True
    assert all(s.options.empty_hostname is False for s in specs)
    assert all(s.options.allowed_schemes == ("https:",) for s in specs)


def test_allowed_urls_dropped_when_allowed_hosts_configured() -> None:
    settings = _settings(allowed_hosts=("npm",), allowed_urls=("https://x.example/a.tgz",))
    specs = build_validator_specs(settings)

    assert [s.name for s in specs] == [Policy.HOSTS]
    assert specs[0].options.allowed_urls == ("https://x.example/a.tgz",)


def test_allowed_urls_runs_alone() -> None:
    specs = build_validator_specs(_settings(allowed_urls=("https://x.example/a.tgz",)))
    assert [s.name for s in specs] == [Policy.URLS]


def test_no_enabled_validator_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        build_validator_specs(_settings(empty_hostname=False))


def test_get_validator_lookup() -> None:
    assert get_validator(Policy.HOSTS) is validate_hosts
    assert get_validator("validateHosts") is validate_hosts
    assert set(VALIDATORS) == set(Policy)
    with pytest.raises(ConfigurationError):
        get_validator("validateEverything")

import json
from pathlib import Path

import pytest

from lockfile_lint.config import CONFIG_PATH_ENV_VAR, Settings, load_settings, to_kebab_case
from lockfile_lint.errors import ConfigurationError
from lockfile_lint.models import LockfileType


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_to_kebab_case() -> None:
    assert to_kebab_case("allowedHosts") == "allowed-hosts"
    assert to_kebab_case("allowed_package_name_aliases") == "allowed-package-name-aliases"
    assert to_kebab_case("path") == "path"


def test_cli_options_only(tmp_path: Path) -> None:
    settings = load_settings({"path": ["yarn.lock"], "allowed-hosts": ["npm"]}, cwd=tmp_path)

    assert settings == Settings(path=("yarn.lock",), allowed_hosts=("npm",))
    assert settings.empty_hostname is True
    assert settings.format == "pretty"
    assert settings.get("allowed-hosts") == ("npm",)


def test_yaml_rc_file_is_merged_under_cli_options(tmp_path: Path) -> None:
    _write(
        tmp_path / ".lockfile-lintrc.yaml",
        "path: package-lock.json\n"
        "type: npm\n"
        "allowedHosts:\n  - npm\n"
        "validate-https: true\n"
        "emptyHostname: false\n",
    )

    settings = load_settings({"allowed-hosts": ["yarn"]}, cwd=tmp_path)

    assert settings.path == ("package-lock.json",)
    assert settings.type is LockfileType.NPM
    assert settings.allowed_hosts == ("yarn",)
    assert settings.validate_https is True
    assert settings.empty_hostname is False


def test_package_json_key_is_used(tmp_path: Path) -> None:
    _write(
        tmp_path / "package.json",
        json.dumps({"name": "app", "lockfile-lint": {"path": "yarn.lock", "validateIntegrity": True}}),
    )

    settings = load_settings({}, cwd=tmp_path)

    assert settings.path == ("yarn.lock",)
    assert settings.validate_integrity is True


def test_package_json_without_key_is_ignored(tmp_path: Path) -> None:
    _write(tmp_path / "package.json", json.dumps({"name": "app"}))
    with pytest.raises(ConfigurationError, match="path"):
        load_settings({}, cwd=tmp_path)


def test_env_var_points_to_config(monkeypatch, tmp_path: Path) -> None:
    config = _write(tmp_path / "conf" / "lint.json", json.dumps({"path": ["a.lock", "b.lock"]}))
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(config))

    settings = load_settings({"validate-https": True}, cwd=tmp_path)

    assert settings.path == ("a.lock", "b.lock")


def test_invalid_values_are_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(
            {"path": "yarn.lock", "type": "pnpm", "empty-hostname": "nope", "bogus": 1},
            cwd=tmp_path,
        )
    message = str(excinfo.value)
    assert "type" in message
    assert "empty-hostname" in message
    assert "bogus" in message


def test_missing_or_malformed_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_settings({}, config_path=tmp_path / "missing.yaml", cwd=tmp_path)

    broken = _write(tmp_path / ".lockfile-lintrc.json", "{nope")
    with pytest.raises(ConfigurationError):
        load_settings({}, config_path=broken, cwd=tmp_path)

    listy = _write(tmp_path / "list.yml", "- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_settings({}, config_path=listy, cwd=tmp_path)

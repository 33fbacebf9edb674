import json
from pathlib import Path

import pytest

from lockfile_lint import cli
from lockfile_lint.config import CONFIG_PATH_ENV_VAR
from lockfile_lint.report import EXIT_FATAL, EXIT_FINDINGS, EXIT_OK
from lockfile_lint.summary import Styler, symbols_supported

YARN_LOCK = """\
# yarn lockfile v1


good@^1.0.0:
  version "1.0.0"
  resolved "https://registry.yarnpkg.com/good/-/good-1.0.0.tgz"
  integrity sha512-abc123==

evil@^1.0.0:
  version "1.0.0"
  resolved "http://evil.example.com/evil-1.0.0.tgz"
"""


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path):
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


def _write_lock(tmp_path: Path, content: str = YARN_LOCK, name: str = "yarn.lock") -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_findings_exit_non_zero(tmp_path: Path, capsys) -> None:
    lockfile = _write_lock(tmp_path)

    code = cli.main(["--path", str(lockfile), "--validate-https", "--validate-integrity", "-f", "plain"])

    captured = capsys.readouterr()
    assert code == EXIT_FINDINGS
    assert "evil@1.0.0" in captured.err
    assert "Error: security issues detected!" in captured.err
    assert "\x1b[" not in captured.err
    assert captured.out == ""


def test_clean_run_exits_zero(tmp_path: Path, capsys) -> None:
    lockfile = _write_lock(tmp_path)

    code = cli.main(["-p", str(lockfile), "-a", "yarn", "evil.example.com", "-f", "plain"])

    assert code == EXIT_OK
    assert "No issues detected" in capsys.readouterr().out


def test_json_format_aggregates_every_lockfile(tmp_path: Path, capsys) -> None:
    _write_lock(tmp_path, name="one/yarn.lock")
    _write_lock(tmp_path, name="two/yarn.lock")

    code = cli.main(["-p", str(tmp_path / "*" / "yarn.lock"), "-s", "-f", "json"])

    report = json.loads(capsys.readouterr().out)
    assert code == EXIT_FINDINGS
    assert report["totals"]["lockfiles"] == 2
    assert report["totals"]["failures"] == 2
    assert [Path(item["path"]).parent.name for item in report["lockfiles"]] == ["one", "two"]


def test_multiple_lockfiles_print_scan_headers(tmp_path: Path, capsys) -> None:
    _write_lock(tmp_path, name="one/yarn.lock")
    _write_lock(tmp_path, name="two/yarn.lock")

    cli.main(["-p", str(tmp_path / "*" / "yarn.lock"), "-s", "-f", "plain"])

    assert capsys.readouterr().out.count("lockfile-lint scanning:") == 2


def test_parse_error_aborts_with_fatal_code(tmp_path: Path, capsys) -> None:
    broken = _write_lock(tmp_path, content="{oops", name="package-lock.json")

    code = cli.main(["-p", str(broken), "-s", "-f", "plain"])

    err = capsys.readouterr().err
    assert code == EXIT_FATAL
    assert "ABORTING lockfile lint process due to error exceptions" in err


def test_configuration_errors_are_fatal(tmp_path: Path, capsys) -> None:
    lockfile = _write_lock(tmp_path)

    assert cli.main(["-p", str(lockfile)]) == EXIT_FATAL
    assert "No validators enabled" in capsys.readouterr().err

    assert cli.main(["-s"]) == EXIT_FATAL


def test_config_file_in_working_directory(tmp_path: Path, capsys) -> None:
    _write_lock(tmp_path)
    (tmp_path / ".lockfile-lintrc").write_text(
        "path: yarn.lock\nallowed-hosts: [yarn]\nformat: plain\n", encoding="utf-8"
    )

    code = cli.main([])

    assert code == EXIT_FINDINGS
    assert "evil.example.com" in capsys.readouterr().err


def test_empty_hostname_flag_parses_booleans() -> None:
    options, config = cli.parse_args(["-p", "yarn.lock", "-e", "false"])
    assert options == {"path": ["yarn.lock"], "empty-hostname": False}
    assert config is None

    with pytest.raises(SystemExit):
        cli.parse_args(["-e", "maybe"])


def test_pretty_styler_uses_color_and_symbol_fallback() -> None:
    assert symbols_supported("linux", {})
    assert not symbols_supported("win32", {})
    assert symbols_supported("win32", {"CI": "true"})
    assert symbols_supported("win32", {"TERM": "xterm-256color"})

    plain = Styler(pretty=False, symbols={"success": "√"})
    assert plain.success("ok") == "ok"
    pretty = Styler(pretty=True, symbols={"success": "√"})
    assert pretty.success("ok") == "\x1b[32m√ ok\x1b[0m"


def test_non_utf8_lockfile_is_fatal(tmp_path: Path, capsys) -> None:
    lockfile = tmp_path / "yarn.lock"
    lockfile.write_bytes(b'a@^1:\n  version "\xff"\n')

    code = cli.main(["-p", str(lockfile), "-s", "-f", "plain"])

    assert code == EXIT_FATAL
    assert "not valid UTF-8" in capsys.readouterr().err


def test_non_utf8_config_file_is_fatal(tmp_path: Path, capsys) -> None:
    _write_lock(tmp_path)
    (tmp_path / ".lockfile-lintrc").write_bytes(b"path: yarn.lock\nformat: \xff\n")

    assert cli.main(["-s"]) == EXIT_FATAL
    assert "not valid UTF-8" in capsys.readouterr().err

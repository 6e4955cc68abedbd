from __future__ import annotations

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from navtest import __version__
from navtest.cli.main import cli, main


def _write_site(tmp_path: Path, *, failing: bool = False) -> Path:
    suites = tmp_path / "suites"
    suites.mkdir()
    (suites / "test_home.py").write_text(
        textwrap.dedent(
            """
            test = driver.test

            driver.start("http://site.test/")
            driver.then(lambda: test.assert_title("Home", "title is Home"))
            driver.then(lambda: test.assert_exists("#main", "main section exists"))
            driver.run(test.done)
            """
        ),
        encoding="utf-8",
    )
    expected = "Elsewhere" if failing else "Home"
    (suites / "test_title.py").write_text(
        f"driver.test.assert_equals(driver.get_title(), {expected!r}, 'title kept')\ndriver.test.done()\n",
        encoding="utf-8",
    )
    config = tmp_path / "navtest.yaml"
    config.write_text(
        textwrap.dedent(
            """
            paths: [suites]
            poll_interval: 0.001
            pages:
              - url: http://site.test/
                title: Home
                selectors: ["#main"]
            """
        ),
        encoding="utf-8",
    )
    return config


def test_cli_help_short_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "run" in result.output


def test_cli_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert f"navtest {__version__}" in result.output


def test_cli_run_passing_suites(tmp_path: Path) -> None:
    config = _write_site(tmp_path)
    report = tmp_path / "report.xml"
    result = CliRunner().invoke(cli, ["run", "--config", str(config), "--save", str(report)])
    assert result.exit_code == 0, result.output
    assert "Test file:" in result.output
    assert "PASS 3 tests executed, 3 passed, 0 failed." in result.output
    assert report.exists()
    assert "<testsuite" in report.read_text(encoding="utf-8")


def test_cli_run_failing_suites_exit_non_zero(tmp_path: Path) -> None:
    config = _write_site(tmp_path, failing=True)
    result = CliRunner().invoke(cli, ["run", "--config", str(config), "--fail-label", "KO"])
    assert result.exit_code == 1, result.output
    assert "KO 3 tests executed, 2 passed, 1 failed." in result.output
    assert "Details for the 1 failed test:" in result.output
    assert "test_title.py:" in result.output


def test_cli_json_report(tmp_path: Path) -> None:
    config = _write_site(tmp_path)
    report = tmp_path / "report.json"
    result = CliRunner().invoke(cli, ["run", "--config", str(config), "--save", str(report), "--no-color"])
    assert result.exit_code == 0, result.output
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["summary"]["total"] == 3


def test_cli_list_only(tmp_path: Path) -> None:
    config = _write_site(tmp_path)
    result = CliRunner().invoke(cli, ["run", "--config", str(config), "--list"])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert [Path(line).name for line in lines] == ["test_home.py", "test_title.py"]


def test_cli_paths_override_config(tmp_path: Path) -> None:
    config = _write_site(tmp_path)
    only = tmp_path / "suites" / "test_title.py"
    result = CliRunner().invoke(cli, ["run", "--config", str(config), "--list", str(only)])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(only)


def test_cli_without_paths_fails() -> None:
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code != 0
    assert "No test suite to run" in result.output


def test_cli_unknown_driver_fails(tmp_path: Path) -> None:
    config = _write_site(tmp_path)
    result = CliRunner().invoke(cli, ["run", "--config", str(config), "--driver", "browser"])
    assert result.exit_code != 0
    assert "No driver registered" in result.output


def test_cli_no_tests_found(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    result = CliRunner().invoke(cli, ["run", str(empty)])
    assert result.exit_code == 1
    assert "No test file found, aborting." in result.output


def test_main_returns_exit_code(tmp_path: Path) -> None:
    config = _write_site(tmp_path)
    assert main(["run", "--config", str(config), "--no-color"]) == 0

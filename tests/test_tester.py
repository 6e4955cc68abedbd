from __future__ import annotations

import re
import sys
from pathlib import Path

import numpy as np
import pytest

from navtest.config.models import TesterOptions
from navtest.core.tester import Tester
from navtest.errors import MissingDriverError, UnsupportedFileKind

from fakes import FakeDriver


@pytest.mark.parametrize("condition", [True, False, 1, 0, "yes", None, [True]])
def test_assert_increments_exactly_one_counter(tester: Tester, condition) -> None:
    outcome = tester.assert_(condition, "condition check")
    assert outcome is (condition is True)
    assert tester.results.passed == (1 if condition is True else 0)
    assert tester.results.failed == (0 if condition is True else 1)
    assert len(tester.results.failures) == tester.results.failed


def test_assert_writes_status_line(tester: Tester, driver: FakeDriver) -> None:
    tester.assert_(True, "it works")
    tester.assert_(False, "it breaks")
    assert driver.lines == ["PASS it works", "FAIL it breaks"]


def test_custom_labels_are_used() -> None:
    driver = FakeDriver()
    tester = Tester(driver, TesterOptions(pass_label="OK", fail_label="KO"))
    tester.pass_("good")
    tester.fail("bad")
    assert driver.lines == ["OK good", "KO bad"]


def test_notifications_are_synchronous_and_ordered(tester: Tester) -> None:
    seen = []
    tester.on("success", lambda details: seen.append(("first", "success", details["message"])))
    tester.on("fail", lambda details: seen.append(("first", "fail", len(tester.results.failures))))
    tester.on("fail", lambda details: seen.append(("second", "fail", details["file"])))
    tester.pass_("one")
    assert seen == [("first", "success", "one")]
    tester.fail("two")
    assert seen[1:] == [("first", "fail", 1), ("second", "fail", None)]


def test_failure_record_carries_current_file(tester: Tester) -> None:
    tester.scheduler.state.current_file = "/suites/login.py"
    tester.fail("login failed")
    record = tester.results.failures[0]
    assert record.message == "login failed"
    assert record.file == "/suites/login.py"


def test_assert_equals_uses_structural_equality(tester: Tester, driver: FakeDriver) -> None:
    assert tester.assert_equals({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1}, "dicts match")
    assert not tester.assert_equals(1, "1", "number is not string")
    assert tester.results.passed == 1
    assert tester.results.failed == 1
    assert "#    got:      1" in driver.lines
    assert "#    expected: '1'" in driver.lines


def test_assert_match_accepts_strings_and_patterns(tester: Tester, driver: FakeDriver) -> None:
    assert tester.assert_match("hello world", r"wor", "string pattern")
    assert tester.assert_match("hello world", re.compile(r"^hello"), "compiled pattern")
    assert not tester.assert_match("hello", r"^bye", "no match")
    assert "#    subject: hello" in driver.lines
    assert "#    pattern: ^bye" in driver.lines


def test_assert_not_inverts_condition(tester: Tester) -> None:
    assert tester.assert_not(False, "false is not true")
    assert not tester.assert_not(True, "true is true")
    assert tester.results.passed == 1
    assert tester.results.failed == 1


def test_assert_raises_passes_only_when_callable_raises(tester: Tester) -> None:
    def explode(value):
        raise ValueError(value)

    assert tester.assert_raises(explode, ["boom"], "raises")
    assert not tester.assert_raises(lambda a, b: a + b, [1, 2], "returns normally")
    assert tester.results.passed == 1
    assert tester.results.failed == 1


def test_driver_backed_assertions() -> None:
    driver = FakeDriver(
        title="Home",
        url="http://site.test/home",
        selectors=["#main"],
        resources=["http://site.test/app.js"],
        data={"count": 3},
    )
    tester = Tester(driver)
    assert tester.assert_exists("#main", "main exists")
    assert tester.assert_selector_exists("#main", "main exists again")
    assert not tester.assert_exists("#missing", "missing is absent")
    assert tester.assert_title("Home", "title")
    assert tester.assert_url_match(r"/home$", "url")
    assert tester.assert_eval(lambda page: page["count"] == 3, "eval")
    assert tester.assert_eval_equals(lambda page: page["count"], 3, "eval equals")
    assert tester.assert_resource_exists("app.js", "resource by substring")
    assert tester.assert_resource_exists(lambda url: url.endswith(".js"), "resource by predicate")
    assert tester.assert_type([1, 2], "array", "type")
    assert tester.results.passed == 9
    assert tester.results.failed == 1


def test_format_message_highlights_call_prefix() -> None:
    driver = FakeDriver()
    driver.colorizer.use_color = True
    tester = Tester(driver)
    formatted = tester.format_message("Casper.start() opens the page")
    assert formatted.startswith(tester.colorize("Casper.start()", "PARAMETER"))
    assert tester.format_message("plain message") == "plain message"


def test_tester_requires_a_driver() -> None:
    with pytest.raises(MissingDriverError):
        Tester(object())  # type: ignore[arg-type]


def test_tester_binds_itself_to_driver(tester: Tester, driver: FakeDriver) -> None:
    assert driver.test is tester


def test_step_error_records_failure_and_signals_done(tester: Tester, driver: FakeDriver) -> None:
    tester.scheduler.state.running = True
    error = RuntimeError("step broke")
    driver.emit("step.error", error)
    assert tester.results.failed == 1
    assert tester.results.failures[0].message is error
    assert tester.scheduler.state.running is False


def test_exec_file_runs_suite_with_driver_handle(tester: Tester, driver: FakeDriver, tmp_path: Path) -> None:
    suite = tmp_path / "suite.py"
    suite.write_text("driver.record(__name__.startswith('navtest_suite_'))\ndriver.test.pass_('ran')\n")
    tester.exec_file(str(suite))
    assert driver.events == [True]
    assert tester.results.passed == 1
    assert tester.current_test_file == str(suite)


def test_exec_file_contains_suite_errors(tester: Tester, tmp_path: Path) -> None:
    suite = tmp_path / "broken.py"
    suite.write_text("raise KeyError('missing')\n")
    tester.scheduler.state.running = True
    tester.exec_file(str(suite))
    assert tester.results.failed == 1
    assert isinstance(tester.results.failures[0].message, KeyError)
    assert tester.scheduler.state.running is False


def test_exec_file_rejects_non_script_files(tester: Tester, tmp_path: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("not a suite")
    with pytest.raises(UnsupportedFileKind):
        tester.exec_file(str(notes))
    with pytest.raises(UnsupportedFileKind):
        tester.exec_file(str(tmp_path / "missing.py"))


def test_exec_file_applies_filter(tester: Tester, driver: FakeDriver, tmp_path: Path) -> None:
    real = tmp_path / "real.py"
    real.write_text("driver.record('real')\n")
    tester.set_filter("exec.file", lambda path: str(real))
    tester.exec_file(str(tmp_path / "placeholder.py"))
    assert driver.events == ["real"]


def test_output_helpers_write_through_driver(tester: Tester, driver: FakeDriver) -> None:
    tester.comment("a note")
    tester.info("some info")
    tester.error("went wrong")
    tester.bar("Test file: x.py", "INFO_BAR")

    assert driver.lines[:3] == ["# a note", "some info", "went wrong"]
    assert driver.lines[3].startswith("Test file: x.py")
    assert len(driver.lines[3]) == 80


def test_suite_module_is_visible_while_executing(tester: Tester, tmp_path: Path) -> None:
    suite = tmp_path / "models.py"
    suite.write_text(
        "from __future__ import annotations\n"
        "from dataclasses import dataclass\n"
        "\n"
        "@dataclass\n"
        "class Point:\n"
        "    x: int\n"
        "\n"
        "driver.test.assert_equals(Point(1).x, 1, 'dataclass defined in a suite')\n"
    )
    tester.exec_file(str(suite))
    assert tester.results.passed == 1
    assert tester.results.failed == 0
    assert not [name for name in sys.modules if name.startswith("navtest_suite_models_")]


def test_exception_failures_export_their_traceback(tester: Tester, tmp_path: Path) -> None:
    suite = tmp_path / "broken.py"
    suite.write_text("raise RuntimeError('boom')\n")
    tester.exec_file(str(suite))
    report = tester.exporter.get_serialized_report()
    assert "Traceback" in report
    assert "RuntimeError: boom" in report


def test_numpy_booleans_are_accepted(tester: Tester) -> None:
    assert tester.assert_(np.bool_(True), "numpy true passes") is True
    assert tester.assert_(np.bool_(False), "numpy false fails") is False
    assert tester.results.passed == 1
    assert tester.results.failed == 1

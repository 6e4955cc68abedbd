"""Assertion engine: records judgments, prints them and notifies listeners."""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional, Pattern, Sequence, Union

import numpy as np

from navtest.config.models import TesterOptions
from navtest.drivers.base import Driver
from navtest.errors import MissingDriverError, UnsupportedFileKind
from navtest.reporting.base import Exporter, create_exporter
from navtest.reporting.colorizer import fill_blanks
from navtest.reporting.terminal import ResultRenderer, format_failure_message
from navtest.utils.filesystem import LocalFileSystem

from .discovery import is_script_file
from .equality import equals, type_of
from .events import EventEmitter
from .results import FailureRecord, TestResults
from .sandbox import execute_suite
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

_CALL_PREFIX = re.compile(r"([a-z0-9_.]+\(\))(.*)", re.IGNORECASE)

UNKNOWN_SUITE = "unknown"


class Tester(EventEmitter):
    """Makes assertions against a driver, stores results and displays them.

    Every assertion emits ``success`` or ``fail`` with a ``{"message", "file"}``
    payload. Suites reach the tester through ``driver.test`` and must call
    :meth:`done` once their asynchronous work has finished.
    """

    __test__ = False

    def __init__(
        self,
        driver: Driver,
        options: Optional[TesterOptions] = None,
        *,
        exporter: Optional[Exporter] = None,
        filesystem: Optional[LocalFileSystem] = None,
    ) -> None:
        super().__init__()
        if not isinstance(driver, Driver):
            raise MissingDriverError("Tester needs a Driver instance")
        self.driver = driver
        self.options = options or TesterOptions()
        self.filesystem = filesystem or LocalFileSystem()
        self.exporter = exporter or create_exporter(self.options.report_format)
        self.results = TestResults()
        self.scheduler = Scheduler(self, poll_interval=self.options.poll_interval, filesystem=self.filesystem)
        self.renderer = ResultRenderer(
            driver,
            self.exporter,
            pass_label=self.options.pass_label,
            fail_label=self.options.fail_label,
            save=self.options.save,
            filesystem=self.filesystem,
        )
        driver.test = self
        driver.on("step.error", self._on_step_error)
        self.on("fail", self._record_failure)

    @property
    def current_test_file(self) -> Optional[str]:
        return self.scheduler.state.current_file

    # primitives

    def assert_(self, condition: Any, message: Any) -> bool:
        """Assert ``condition`` is exactly ``True`` (a numpy ``True`` counts too)."""

        passed = condition is True or (isinstance(condition, np.bool_) and bool(condition))
        if isinstance(message, BaseException):
            detail = format_failure_message(message)
        else:
            detail = "test failed"
        return self._record(passed, message, kind="assert", detail=detail)

    def assert_equals(self, actual: Any, expected: Any, message: str) -> bool:
        if equals(actual, expected):
            return self._record(True, message, kind="assertEquals")
        detail = f"test failed; expected: {expected!r}; got: {actual!r}"
        return self._record(
            False,
            message,
            kind="assertEquals",
            detail=detail,
            comments=(f"   got:      {actual!r}", f"   expected: {expected!r}"),
        )

    def assert_match(self, subject: str, pattern: Union[str, Pattern[str]], message: str) -> bool:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        if regex.search(subject) is not None:
            return self._record(True, message, kind="assertMatch")
        detail = f"test failed; subject: {subject}; pattern: {regex.pattern}"
        return self._record(
            False,
            message,
            kind="assertMatch",
            detail=detail,
            comments=(f"   subject: {subject}", f"   pattern: {regex.pattern}"),
        )

    def assert_not(self, condition: Any, message: str) -> bool:
        return self.assert_(not condition, message)

    def assert_raises(self, fn: Callable[..., Any], args: Sequence[Any], message: str) -> bool:
        try:
            fn(*args)
        except Exception:
            return self.pass_(message)
        return self.fail(message)

    def pass_(self, message: Any) -> bool:
        return self.assert_(True, message)

    def fail(self, message: Any) -> bool:
        return self.assert_(False, message)

    # driver-backed assertions

    def assert_eval(self, fn: Callable[..., Any], message: str) -> bool:
        return self.assert_(self.driver.evaluate(fn), message)

    def assert_eval_equals(self, fn: Callable[..., Any], expected: Any, message: str) -> bool:
        return self.assert_equals(self.driver.evaluate(fn), expected, message)

    def assert_exists(self, selector: str, message: str) -> bool:
        return self.assert_(self.driver.exists(selector), message)

    assert_selector_exists = assert_exists

    def assert_resource_exists(self, test: Any, message: str) -> bool:
        return self.assert_(self.driver.resource_exists(test), message)

    def assert_title(self, expected: str, message: str) -> bool:
        return self.assert_equals(self.driver.get_title(), expected, message)

    def assert_type(self, value: Any, type_name: str, message: str) -> bool:
        return self.assert_equals(type_of(value), type_name, message)

    def assert_url_match(self, pattern: Union[str, Pattern[str]], message: str) -> bool:
        return self.assert_match(self.driver.get_current_url(), pattern, message)

    # output

    def bar(self, text: str, style: Optional[str] = None) -> None:
        self.driver.echo(fill_blanks(text), style)

    def colorize(self, text: str, style: Optional[str] = None) -> str:
        return self.driver.colorizer.colorize(text, style)

    def comment(self, message: str) -> None:
        self.driver.echo(f"# {message}", "COMMENT")

    def error(self, message: str) -> None:
        self.driver.echo(message, "ERROR")

    def info(self, message: str) -> None:
        self.driver.echo(message, "PARAMETER")

    def format_message(self, message: Any, style: Optional[str] = None) -> str:
        """Highlight a leading ``name()`` token of ``message``."""

        text = str(message)
        parts = _CALL_PREFIX.match(text)
        if not parts:
            return text
        return self.colorize(parts.group(1), "PARAMETER") + self.colorize(parts.group(2), style)

    # execution

    def exec_file(self, path: str) -> None:
        """Run a suite file in isolation, containing any error it raises."""

        path = str(self.filter("exec.file", path) or path)
        if not self.filesystem.is_file(path) or not is_script_file(path):
            raise UnsupportedFileKind(f"Can only exec() files with .py extension: {path}")
        self.scheduler.state.current_file = path
        try:
            execute_suite(path, self.driver)
        except Exception as exc:
            logger.debug("Suite %s raised", path, exc_info=True)
            self.fail(exc)
            self.done()

    def done(self) -> None:
        """Declare the current suite done."""

        self.scheduler.done()

    async def run_suites(self, *paths: str) -> None:
        await self.scheduler.run_suites(*paths)

    def render_results(self, exit: bool = False, status: int = 0, save: Optional[str] = None) -> None:
        self.renderer.render(self.results, exit=exit, status=status, save=save)

    # internals

    def _record(
        self,
        passed: bool,
        message: Any,
        *,
        kind: str,
        detail: Optional[str] = None,
        comments: Sequence[str] = (),
    ) -> bool:
        suite = self.current_test_file or UNKNOWN_SUITE
        if passed:
            self.results.passed += 1
            self.exporter.add_success(suite, str(message))
            event, status, style = "success", self.options.pass_label, "INFO"
        else:
            self.results.failed += 1
            self.exporter.add_failure(suite, str(message), detail, kind)
            event, status, style = "fail", self.options.fail_label, "RED_BAR"
        self.emit(event, {"message": message, "file": self.current_test_file})
        warning = None if passed or kind == "assert" else "WARNING"
        self.driver.echo(f"{self.colorize(status, style)} {self.format_message(message, warning)}")
        for line in comments:
            self.comment(line)
        return passed

    def _record_failure(self, details: dict) -> None:
        self.results.failures.append(FailureRecord(message=details["message"], file=details["file"]))

    def _on_step_error(self, exc: BaseException) -> None:
        self.fail(exc)
        self.done()

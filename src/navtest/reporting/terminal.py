"""Terminal rendering of the end-of-run summary."""
from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, Any, Optional, Sequence

from navtest.core.results import FailureRecord, TestResults
from navtest.errors import ReportWriteError
from navtest.utils.filesystem import LocalFileSystem

from .base import Exporter
from .colorizer import fill_blanks

if TYPE_CHECKING:
    from navtest.drivers.base import Driver

logger = logging.getLogger(__name__)


class ResultRenderer:
    """Prints the summary banner and failure details, then saves the report."""

    def __init__(
        self,
        driver: "Driver",
        exporter: Exporter,
        *,
        pass_label: str = "PASS",
        fail_label: str = "FAIL",
        save: Optional[str] = None,
        filesystem: Optional[LocalFileSystem] = None,
    ) -> None:
        self._driver = driver
        self._exporter = exporter
        self._pass_label = pass_label
        self._fail_label = fail_label
        self._save = save
        self._fs = filesystem or LocalFileSystem()

    def render(
        self,
        results: TestResults,
        *,
        exit: bool = False,
        status: int = 0,
        save: Optional[str] = None,
    ) -> None:
        save = save if isinstance(save, str) else self._save
        total = results.total
        if total == 0:
            style = "RED_BAR"
            summary = f"{self._fail_label} Looks like you didn't run any test."
        else:
            if results.failed > 0:
                label, style = self._fail_label, "RED_BAR"
            else:
                label, style = self._pass_label, "GREEN_BAR"
            summary = f"{label} {total} tests executed, {results.passed} passed, {results.failed} failed."
        self._driver.echo(self._driver.colorizer.colorize(fill_blanks(summary), style))
        if results.failed > 0:
            self.render_failure_details(results.failures)
        if save:
            try:
                self._write_report(save)
            except ReportWriteError as exc:
                logger.warning("%s", exc)
                self._driver.echo(str(exc), "ERROR")
            else:
                self._driver.echo(f"Result log stored in {save}", "INFO")
        if exit:
            self._driver.exit(status)

    def render_failure_details(self, failures: Sequence[FailureRecord]) -> None:
        if not failures:
            return
        count = len(failures)
        self._driver.echo(f"\nDetails for the {count} failed test{'s' if count > 1 else ''}:\n", "PARAMETER")
        for failure in failures:
            self._driver.echo(f"In {failure.file}:")
            self._driver.echo(f"    {format_failure_message(failure.message)}", "COMMENT")

    def _write_report(self, path: str) -> None:
        text = self._exporter.get_serialized_report()
        try:
            self._fs.write_text(path, text)
        except OSError as exc:
            raise ReportWriteError(path, exc) from exc


def format_failure_message(message: Any) -> str:
    """Return the traceback of an exception, or the message as text."""

    if isinstance(message, BaseException) and message.__traceback__ is not None:
        return "".join(traceback.format_exception(type(message), message, message.__traceback__)).rstrip()
    return str(message)

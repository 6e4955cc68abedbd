"""Sequential suite scheduler driven by explicit completion signals."""
from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from navtest.errors import NoSuitesProvided, NoTestsFound
from navtest.utils.filesystem import LocalFileSystem

from . import discovery

if TYPE_CHECKING:
    from .tester import Tester

logger = logging.getLogger(__name__)


class RunState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class SchedulerState:
    """Mutable bookkeeping for one run.

    ``running`` is only cleared by :meth:`Scheduler.done`; ``cursor`` points at
    the next file of ``queue`` to start.
    """

    running: bool = False
    current_file: Optional[str] = None
    queue: List[str] = field(default_factory=list)
    cursor: int = 0


class Scheduler:
    """Runs suites one at a time, advancing only when the current one is done.

    Suites do their work in tasks on the event loop that the scheduler cannot
    observe, so it polls its state every ``poll_interval`` seconds and yields
    to the loop in between. There is no timeout: a suite that never calls
    ``done()`` keeps the run waiting forever.

    Once the queue is exhausted the run exits with status 1 when any assertion
    failed and 0 otherwise, so CI jobs can gate on the exit code.
    """

    def __init__(
        self,
        tester: "Tester",
        *,
        poll_interval: float = 0.1,
        filesystem: Optional[LocalFileSystem] = None,
    ) -> None:
        self._tester = tester
        self.poll_interval = poll_interval
        self._fs = filesystem or LocalFileSystem()
        self.state = SchedulerState()
        self._finished = False

    @property
    def run_state(self) -> RunState:
        if self._finished:
            return RunState.FINISHED
        return RunState.RUNNING if self.state.running else RunState.IDLE

    def discover(self, *paths: str) -> List[str]:
        """Resolve ``paths`` to suite files, warning about missing ones."""

        if not paths:
            raise NoSuitesProvided("No test suite to run")
        return discovery.resolve(
            paths,
            filesystem=self._fs,
            on_missing=lambda path: self._tester.bar(f"Path {path} doesn't exist", "RED_BAR"),
        )

    async def run_suites(self, *paths: str) -> None:
        """Discover and run every suite under ``paths``, then render results."""

        files = self.discover(*paths)
        if not files:
            self._tester.bar("No test file found, aborting.", "RED_BAR")
            self._tester.driver.exit(1)
            raise NoTestsFound(f"No test file found in {', '.join(paths)}")
        self.state.queue = list(files)
        self.state.cursor = 0
        logger.debug("Scheduling %d suite(s)", len(files))
        while self.tick() is not RunState.FINISHED:
            await asyncio.sleep(self.poll_interval)

    def tick(self) -> RunState:
        """Advance the state machine by at most one transition."""

        if self._finished or self.state.running:
            return self.run_state
        if self.state.cursor >= len(self.state.queue):
            self._finished = True
            logger.debug("All suites done")
            results = self._tester.results
            self._tester.render_results(exit=True, status=1 if results.failed else 0)
            return RunState.FINISHED
        path = self.state.queue[self.state.cursor]
        self.state.cursor += 1
        self.run_test(path)
        return self.run_state

    def run_test(self, path: str) -> None:
        self._tester.bar(f"Test file: {path}", "INFO_BAR")
        logger.debug("Starting suite %s", path)
        self.state.running = True
        self.state.current_file = path
        try:
            self._tester.exec_file(path)
        except Exception as exc:
            self._tester.fail(exc)
            self.done()

    def done(self) -> None:
        if self.state.running:
            logger.debug("Suite %s signalled completion", self.state.current_file)
        self.state.running = False

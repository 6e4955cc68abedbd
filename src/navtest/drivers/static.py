"""In-memory driver serving pages declared up front.

Used for development, CI and the bundled examples: navigation and checks run
against :class:`~navtest.config.models.PageConfig` records instead of a real
browser, but steps still execute asynchronously on the event loop the way a
real automation backend would.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, List, Mapping, Optional

from navtest.config.models import PageConfig
from navtest.reporting.colorizer import Colorizer

from .base import Driver, driver_manager

logger = logging.getLogger(__name__)

Step = Callable[[], Any]


class StaticDriver(Driver):
    name = "static"

    def __init__(
        self,
        pages: Optional[Mapping[str, PageConfig]] = None,
        *,
        colorizer: Optional[Colorizer] = None,
    ) -> None:
        super().__init__(colorizer=colorizer)
        self.pages = dict(pages or {})
        self.page: Optional[PageConfig] = None
        self._steps: List[Step] = []
        self._tasks: List["asyncio.Task[None]"] = []

    # navigation steps

    def start(self, url: Optional[str] = None, then: Optional[Step] = None) -> "StaticDriver":
        self._steps = []
        if url:
            self.open(url)
        if then:
            self.then(then)
        return self

    def open(self, url: str) -> "StaticDriver":
        return self.then(lambda: self._navigate(url))

    def then(self, step: Step) -> "StaticDriver":
        self._steps.append(step)
        return self

    def run(self, on_complete: Optional[Step] = None) -> "asyncio.Task[None]":
        """Schedule the queued steps on the running loop and return the task."""

        steps, self._steps = self._steps, []
        task = asyncio.get_running_loop().create_task(self._run_steps(steps, on_complete))
        self._tasks.append(task)
        task.add_done_callback(self._tasks.remove)
        return task

    async def _run_steps(self, steps: List[Step], on_complete: Optional[Step]) -> None:
        if on_complete:
            steps = [*steps, on_complete]
        for index, step in enumerate(steps, start=1):
            await asyncio.sleep(0)
            try:
                result = step()
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.debug("Step %d/%d failed: %s", index, len(steps), exc)
                self.emit("step.error", exc)
                return

    def _navigate(self, url: str) -> None:
        page = self.pages.get(url)
        if page is None:
            raise LookupError(f"No page served at {url}")
        self.page = page

    # page queries

    def exists(self, selector: str) -> bool:
        return self.page is not None and selector in self.page.selectors

    def evaluate(self, fn: Callable[..., Any], *args: Any) -> Any:
        data = dict(self.page.data) if self.page else {}
        return fn(data, *args)

    def get_title(self) -> str:
        return self.page.title if self.page else ""

    def get_current_url(self) -> str:
        return self.page.url if self.page else "about:blank"

    def resource_exists(self, test: Any) -> bool:
        resources = self.page.resources if self.page else ()
        if callable(test):
            return any(test(resource) for resource in resources)
        return any(str(test) in resource for resource in resources)


def register_static_driver() -> None:
    driver_manager.register(StaticDriver.name, StaticDriver)

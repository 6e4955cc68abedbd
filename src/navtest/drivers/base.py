"""Driver abstractions."""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional

import click

from navtest.core.events import EventEmitter
from navtest.reporting.colorizer import Colorizer


class Driver(EventEmitter):
    """Base interface for automation drivers.

    Drivers emit ``step.error`` with the raised exception when one of their
    asynchronous steps fails. The tester bound to the driver is available as
    ``driver.test``.
    """

    name: str = ""

    def __init__(self, *, colorizer: Optional[Colorizer] = None) -> None:
        super().__init__()
        self.colorizer = colorizer or Colorizer()
        self.test: Any = None

    def exists(self, selector: str) -> bool:
        raise NotImplementedError

    def evaluate(self, fn: Callable[..., Any], *args: Any) -> Any:
        raise NotImplementedError

    def get_title(self) -> str:
        raise NotImplementedError

    def get_current_url(self) -> str:
        raise NotImplementedError

    def resource_exists(self, test: Any) -> bool:
        raise NotImplementedError

    def echo(self, text: str, style: Optional[str] = None) -> None:
        click.echo(self.colorizer.colorize(text, style))

    def exit(self, status: int = 0) -> None:
        raise SystemExit(status)


DriverFactory = Callable[..., Driver]


class DriverManager:
    """Registry for driver factories keyed by name."""

    def __init__(self) -> None:
        self._factories: Dict[str, DriverFactory] = {}

    def register(self, name: str, factory: DriverFactory) -> None:
        if name in self._factories:
            raise ValueError(f"Driver '{name}' already registered")
        self._factories[name] = factory

    def create(self, name: str, **kwargs: Any) -> Driver:
        factory = self._factories.get(name)
        if factory is None:
            available = ", ".join(sorted(self._factories)) or "none"
            raise KeyError(f"No driver registered as {name!r} (available: {available})")
        return factory(**kwargs)

    def names(self) -> Iterable[str]:
        return tuple(self._factories)


driver_manager = DriverManager()

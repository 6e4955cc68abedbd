"""Registers a ``recording`` driver; load with NAVTEST_PLUGINS=plugin."""
from navtest.drivers import StaticDriver, driver_manager


class RecordingDriver(StaticDriver):
    """Static driver that remembers every URL it navigated to."""

    name = "recording"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.history = []

    def _navigate(self, url: str) -> None:
        super()._navigate(url)
        self.history.append(url)


def register() -> None:
    driver_manager.register(RecordingDriver.name, RecordingDriver)

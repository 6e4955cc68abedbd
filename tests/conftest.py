import pytest

from navtest import bootstrap
from navtest.config.models import TesterOptions
from navtest.core.tester import Tester

from fakes import FakeDriver


@pytest.fixture(scope="session", autouse=True)
def setup_navtest_registry() -> None:
    """Register built-in drivers once for the entire test session."""

    bootstrap()


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def tester(driver: FakeDriver) -> Tester:
    return Tester(driver, TesterOptions(poll_interval=0.001))

"""Exception hierarchy for navtest."""
from __future__ import annotations


class NavtestError(Exception):
    """Base class for every error raised by navtest itself."""


class MissingDriverError(NavtestError):
    """A tester was built without a usable driver."""


class UnsupportedFileKind(NavtestError):
    """A path offered for execution is not a runnable script file."""


class NoSuitesProvided(NavtestError):
    """No suite paths were given to the run entry point."""


class NoTestsFound(NavtestError):
    """Discovery resolved the given paths to an empty file list."""


class ReportWriteError(NavtestError):
    """The serialized report could not be written to disk."""

    def __init__(self, path: str, reason: BaseException) -> None:
        super().__init__(f"Unable to write results to {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(NavtestError):
    """A configuration file is missing, malformed or fails validation."""

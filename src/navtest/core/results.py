"""Result data structures accumulated by the tester."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class FailureRecord:
    """A failed assertion and the suite file it came from."""

    message: Any
    file: Optional[str] = None


@dataclass
class TestResults:
    """Running totals for a whole run."""

    __test__ = False

    passed: int = 0
    failed: int = 0
    failures: List[FailureRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed

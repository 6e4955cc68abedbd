"""Immutable configuration records."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple


REPORT_FORMATS = ("xunit", "json")


@dataclass(frozen=True)
class TesterOptions:
    """Options read once when a tester is built."""

    pass_label: str = "PASS"
    fail_label: str = "FAIL"
    save: Optional[str] = None
    report_format: str = "xunit"
    poll_interval: float = 0.1


@dataclass(frozen=True)
class PageConfig:
    """A page served by the static driver."""

    url: str
    title: str = ""
    selectors: Tuple[str, ...] = field(default_factory=tuple)
    resources: Tuple[str, ...] = field(default_factory=tuple)
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RunConfig:
    options: TesterOptions = field(default_factory=TesterOptions)
    paths: Sequence[str] = field(default_factory=tuple)
    driver: str = "static"
    color: bool = True
    pages: Mapping[str, PageConfig] = field(default_factory=dict)

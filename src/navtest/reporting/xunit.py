"""XUnit XML exporter."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Optional

from .base import Exporter


@dataclass
class _Case:
    suite: str
    message: str
    kind: Optional[str] = None
    detail: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.kind is None


class XUnitExporter(Exporter):
    """Builds a single ``<testsuite>`` document, one ``<testcase>`` per assertion."""

    def __init__(self) -> None:
        self._cases: List[_Case] = []

    def add_success(self, suite: str, message: str) -> None:
        self._cases.append(_Case(suite=suite, message=message))

    def add_failure(self, suite: str, message: str, detail: Optional[str], kind: str) -> None:
        self._cases.append(_Case(suite=suite, message=message, kind=kind, detail=detail))

    def get_serialized_report(self) -> str:
        failures = sum(1 for case in self._cases if not case.passed)
        root = ET.Element("testsuite", tests=str(len(self._cases)), failures=str(failures))
        for case in self._cases:
            node = ET.SubElement(root, "testcase", classname=case.suite, name=case.message)
            if not case.passed:
                failure = ET.SubElement(node, "failure", type=case.kind or "assert")
                failure.text = case.detail or ""
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode")

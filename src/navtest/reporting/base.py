"""Exporter interface definitions."""
from __future__ import annotations

from typing import Optional


class Exporter:
    """Accumulates per-assertion records and serializes a report."""

    def add_success(self, suite: str, message: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def add_failure(
        self, suite: str, message: str, detail: Optional[str], kind: str
    ) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def get_serialized_report(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError


def create_exporter(report_format: str) -> Exporter:
    """Return a fresh exporter for ``report_format`` (``xunit`` or ``json``)."""

    from .json_exporter import JsonExporter
    from .xunit import XUnitExporter

    exporters = {"xunit": XUnitExporter, "json": JsonExporter}
    try:
        return exporters[report_format]()
    except KeyError as exc:
        supported = ", ".join(sorted(exporters))
        raise ValueError(f"Unknown report format '{report_format}'. Supported formats: {supported}") from exc

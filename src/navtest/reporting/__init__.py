"""Reporting exports."""
from .base import Exporter, create_exporter
from .colorizer import Colorizer, fill_blanks
from .json_exporter import JsonExporter
from .terminal import ResultRenderer
from .xunit import XUnitExporter

__all__ = [
    "Colorizer",
    "Exporter",
    "JsonExporter",
    "ResultRenderer",
    "XUnitExporter",
    "create_exporter",
    "fill_blanks",
]

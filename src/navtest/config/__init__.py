"""Configuration records and loader."""

from .loader import load_config
from .models import REPORT_FORMATS, PageConfig, RunConfig, TesterOptions

__all__ = [
    "REPORT_FORMATS",
    "PageConfig",
    "RunConfig",
    "TesterOptions",
    "load_config",
]

"""Core models and helpers exposed at the package level."""
from .equality import UNDEFINED, equals, type_of
from .events import EventEmitter
from .results import FailureRecord, TestResults

__all__ = [
    "UNDEFINED",
    "EventEmitter",
    "FailureRecord",
    "TestResults",
    "equals",
    "type_of",
]

"""Logging and reporting utilities."""

from .logging import setup_logging
from .reporting import (
    CallbackReporter,
    RecordingReporter,
    Reporter,
    ReportEvent,
    ReportLevel,
)

__all__ = [
    'setup_logging',
    'CallbackReporter',
    'RecordingReporter',
    'Reporter',
    'ReportEvent',
    'ReportLevel',
]

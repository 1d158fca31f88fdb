"""User-facing progress reporting.

Import stages never print. They emit :class:`ReportEvent` objects to a
reporter handed to them, and the reporter decides where the event goes.
"""

from enum import Enum
from typing import Callable, List, Optional

from loguru import logger
from pydantic import BaseModel, Field


class ReportLevel(str, Enum):
    """Severity of a report event."""

    INFO = 'info'
    SUCCESS = 'success'
    WARNING = 'warning'
    ERROR = 'error'


_LOGURU_LEVELS = {
    ReportLevel.INFO: 'INFO',
    ReportLevel.SUCCESS: 'SUCCESS',
    ReportLevel.WARNING: 'WARNING',
    ReportLevel.ERROR: 'ERROR',
}


class ReportEvent(BaseModel):
    """A single message for the user."""

    level: ReportLevel = Field(..., description='Event severity')
    message: str = Field(..., description='Human-readable message')


class Reporter:
    """Base reporter; mirrors every event to the log."""

    def __init__(self):
        self.logger = logger.bind(component='Reporter')

    def emit(self, level: ReportLevel, message: str) -> ReportEvent:
        event = ReportEvent(level=level, message=message)
        self.logger.log(_LOGURU_LEVELS[event.level], event.message)
        self.handle(event)
        return event

    def handle(self, event: ReportEvent) -> None:
        """Deliver an event; the base class only logs."""
        pass

    def info(self, message: str) -> ReportEvent:
        return self.emit(ReportLevel.INFO, message)

    def success(self, message: str) -> ReportEvent:
        return self.emit(ReportLevel.SUCCESS, message)

    def warning(self, message: str) -> ReportEvent:
        return self.emit(ReportLevel.WARNING, message)

    def error(self, message: str) -> ReportEvent:
        return self.emit(ReportLevel.ERROR, message)


class RecordingReporter(Reporter):
    """Reporter that keeps every event in memory."""

    def __init__(self):
        super().__init__()
        self.events: List[ReportEvent] = []

    def handle(self, event: ReportEvent) -> None:
        self.events.append(event)

    def messages(self, level: Optional[ReportLevel] = None) -> List[str]:
        """Messages emitted so far, optionally filtered by level."""
        return [e.message for e in self.events if level is None or e.level == level]


class CallbackReporter(Reporter):
    """Reporter that forwards events to a callable, e.g. a console printer."""

    def __init__(self, callback: Callable[[ReportEvent], None]):
        super().__init__()
        self.callback = callback

    def handle(self, event: ReportEvent) -> None:
        self.callback(event)

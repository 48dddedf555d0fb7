"""
Clock used for overdue detection and completion dates.
Injected as a FastAPI dependency so tests can pin "today".
"""

from datetime import date
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock(Clock):
    """Server local date"""

    def today(self) -> date:
        return date.today()


class FixedClock(Clock):
    """Always returns the same date"""

    def __init__(self, current: date):
        self.current = current

    def today(self) -> date:
        return self.current


_system_clock = SystemClock()


def get_clock() -> Clock:
    """Dependency injection for the current date"""
    return _system_clock

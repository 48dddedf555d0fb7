"""Calendar helpers shared by contracts and schedule generation"""

from datetime import date, datetime
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

# Average month length used by the schedule window cutoff
AVERAGE_DAYS_PER_MONTH = 30.44


def add_months(value: date, months: int) -> date:
    """
    Advance a date by whole calendar months.
    Keeps the day of month, clamping to the last day for shorter months
    (2024-01-31 + 1 month -> 2024-02-29).
    """
    return value + relativedelta(months=months)


def contract_end_date(start_date: Optional[date], period_months: Optional[int]) -> Optional[date]:
    """End of a contract term: start + period in calendar months, or None without a start"""
    if not start_date or not period_months:
        return None
    return add_months(start_date, period_months)


def as_date(value: Union[date, datetime, None]) -> Optional[date]:
    """Drop the time part of a datetime, pass dates and None through"""
    if isinstance(value, datetime):
        return value.date()
    return value

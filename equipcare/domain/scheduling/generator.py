"""
Service schedule generation

Turns a contract's servicing terms into the ordered list of service due dates.
Pure and deterministic: no database access, no clock.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from ...utils.dates import AVERAGE_DAYS_PER_MONTH, add_months


class ContractType(str, Enum):
    QUARTERLY = "Quarterly Service"
    HALF_YEAR = "Half-year Service"
    ANNUAL = "Annual Service"


CONTRACT_TYPES = [t.value for t in ContractType]

# Months between services; anything unrecognised is serviced annually
INTERVAL_MONTHS = {
    ContractType.QUARTERLY.value: 3,
    ContractType.HALF_YEAR.value: 6,
    ContractType.ANNUAL.value: 12,
}
DEFAULT_INTERVAL_MONTHS = 12


@dataclass(frozen=True)
class ContractTerms:
    """The contract fields that drive the service schedule"""

    contract_type: str
    period_months: int
    start_date: Optional[date]


@dataclass(frozen=True)
class ServiceOccurrence:
    """A generated service slot. Identity is (period_number, year), not position."""

    period_number: int
    year: int
    due_date: date
    period_label: str

    @property
    def key(self) -> Tuple[int, int]:
        return (self.period_number, self.year)


def interval_months(contract_type: str) -> int:
    return INTERVAL_MONTHS.get(contract_type, DEFAULT_INTERVAL_MONTHS)


def format_period_label(contract_type: str, period_number: int, year: int) -> str:
    """Q2 2024 / H1 2024 / Annual 2024"""
    if contract_type == ContractType.QUARTERLY.value:
        return f"Q{period_number} {year}"
    if contract_type == ContractType.HALF_YEAR.value:
        return f"H{period_number} {year}"
    return f"Annual {year}"


def _next_period(contract_type: str, period_number: int, year: int) -> Tuple[int, int]:
    if contract_type == ContractType.QUARTERLY.value:
        period_number += 1
        if period_number > 4:
            return 1, year + 1
        return period_number, year
    if contract_type == ContractType.HALF_YEAR.value:
        if period_number == 1:
            return 2, year
        return 1, year + 1
    return 1, year + 1


def schedule_window_end(start_date: date, period_months: int) -> datetime:
    """
    Last moment a service may fall on.

    Uses an average month of 30.44 days rather than calendar months, so a
    candidate exactly one term after the start can land on either side of the
    cutoff depending on leap years. Kept for compatibility with existing
    schedules.
    """
    return datetime.combine(start_date, time()) + timedelta(
        days=period_months * AVERAGE_DAYS_PER_MONTH
    )


def generate_schedule(
    contract_type: str, period_months: int, start_date: date
) -> List[ServiceOccurrence]:
    """
    Generate the service occurrences for a contract term.

    Due dates start at start_date and advance by the contract's interval in
    calendar months (3 quarterly, 6 half-yearly, 12 otherwise), stepping from the
    previous due date with end-of-month clamping. Generation stops once the due
    date passes the schedule window end.
    """
    if isinstance(period_months, bool) or not isinstance(period_months, int) or period_months <= 0:
        raise ValueError(f"Contract period must be a positive number of months, got {period_months!r}")
    if isinstance(start_date, datetime):
        start_date = start_date.date()

    step = interval_months(contract_type)
    window_end = schedule_window_end(start_date, period_months)

    occurrences = []
    current = start_date
    period_number = 1
    year = start_date.year

    while datetime.combine(current, time()) <= window_end:
        occurrences.append(
            ServiceOccurrence(
                period_number=period_number,
                year=year,
                due_date=current,
                period_label=format_period_label(contract_type, period_number, year),
            )
        )
        current = add_months(current, step)
        period_number, year = _next_period(contract_type, period_number, year)

    return occurrences


def generate_for_terms(terms: ContractTerms) -> List[ServiceOccurrence]:
    return generate_schedule(terms.contract_type, terms.period_months, terms.start_date)

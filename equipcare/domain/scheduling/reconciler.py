"""
Schedule reconciliation

Merges generated service occurrences with the service records already stored
for a contract, and replaces the schedule when contract terms change without
ever touching completed records.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from ...models import Contract, ServiceRecord
from .generator import ContractTerms, ServiceOccurrence, generate_for_terms
from .repository import ServiceRecordStore, StoreError

logger = logging.getLogger(__name__)


@dataclass
class ScheduleEntry:
    """
    One row of a contract's service schedule.

    record_id is None while the entry is unmaterialized (generated but never
    saved); it is set once the slot exists as a ServiceRecord.
    """

    contract_id: int
    period_number: int
    year: int
    period_label: str
    due_date: date
    completed: bool = False
    completed_date: Optional[date] = None
    notes: str = ""
    record_id: Optional[int] = None

    @property
    def key(self) -> Tuple[int, int]:
        return (self.period_number, self.year)

    @property
    def materialized(self) -> bool:
        return self.record_id is not None

    def is_overdue(self, today: date) -> bool:
        return not self.completed and self.due_date < today

    def to_record(self) -> ServiceRecord:
        """Fresh, unsaved ServiceRecord carrying this entry's state"""
        return ServiceRecord(
            contract_id=self.contract_id,
            due_date=self.due_date,
            period_number=self.period_number,
            year=self.year,
            completed=self.completed,
            completed_date=self.completed_date,
            notes=self.notes,
        )


@dataclass
class RegenerationPlan:
    contract_id: int
    to_delete: List[ServiceRecord] = field(default_factory=list)
    to_insert: List[ServiceRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_delete and not self.to_insert


@dataclass
class RegenerationResult:
    """Outcome of the two phases of a schedule regeneration"""

    delete_succeeded: bool = True
    insert_succeeded: bool = True
    deleted_count: int = 0
    inserted_count: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return self.delete_succeeded != self.insert_succeeded


def contract_terms(contract: Contract) -> ContractTerms:
    return ContractTerms(
        contract_type=contract.contract_type,
        period_months=contract.contract_period,
        start_date=contract.effective_start_date,
    )


def _record_rank(record: ServiceRecord) -> tuple:
    return (
        bool(record.completed),
        bool(record.notes),
        record.updated_at or datetime.min,
        record.id or 0,
    )


def _index_records(records: Iterable[ServiceRecord]) -> dict:
    """
    Map (period_number, year) -> record.
    A key can be stored twice after a regeneration. A completed record wins,
    then one carrying notes, then the most recently updated one.
    """
    index = {}
    for record in records:
        key = (record.period_number, record.year)
        current = index.get(key)
        if current is None or _record_rank(record) > _record_rank(current):
            index[key] = record
    return index


def _entry_from_record(record: ServiceRecord, occurrence: ServiceOccurrence) -> ScheduleEntry:
    return ScheduleEntry(
        contract_id=record.contract_id,
        period_number=record.period_number,
        year=record.year,
        period_label=occurrence.period_label,
        due_date=record.due_date,
        completed=bool(record.completed),
        completed_date=record.completed_date,
        notes=record.notes or "",
        record_id=record.id,
    )


def _entry_from_occurrence(contract_id: int, occurrence: ServiceOccurrence) -> ScheduleEntry:
    return ScheduleEntry(
        contract_id=contract_id,
        period_number=occurrence.period_number,
        year=occurrence.year,
        period_label=occurrence.period_label,
        due_date=occurrence.due_date,
    )


def reconcile(contract: Contract, persisted_records: Iterable[ServiceRecord]) -> List[ScheduleEntry]:
    """
    Merge the contract's generated schedule with its stored service records.

    Stored records are used as-is for their slot; slots without a record become
    unmaterialized entries. Order follows the generated schedule, and stored
    records for slots no longer generated are left out.
    """
    occurrences = generate_for_terms(contract_terms(contract))
    index = _index_records(persisted_records)

    entries = []
    for occurrence in occurrences:
        record = index.get(occurrence.key)
        if record is not None:
            entries.append(_entry_from_record(record, occurrence))
        else:
            entries.append(_entry_from_occurrence(contract.id, occurrence))
    return entries


def terms_changed(old_terms: ContractTerms, new_terms: ContractTerms) -> bool:
    return old_terms != new_terms


def plan_regeneration(
    contract_id: int,
    persisted_records: Iterable[ServiceRecord],
    old_terms: ContractTerms,
    new_terms: ContractTerms,
) -> RegenerationPlan:
    """
    Work out which records a terms change replaces.

    Every uncompleted record is dropped and the full schedule for the new terms
    is inserted as uncompleted records. Completed records are never selected
    for deletion.
    """
    plan = RegenerationPlan(contract_id=contract_id)
    if not terms_changed(old_terms, new_terms):
        return plan

    plan.to_delete = [r for r in persisted_records if not r.completed]
    plan.to_insert = [
        ServiceRecord(
            contract_id=contract_id,
            due_date=occurrence.due_date,
            period_number=occurrence.period_number,
            year=occurrence.year,
            completed=False,
            notes="",
        )
        for occurrence in generate_for_terms(new_terms)
    ]
    return plan


def apply_regeneration(store: ServiceRecordStore, plan: RegenerationPlan) -> RegenerationResult:
    """
    Delete the stale uncompleted records, then insert the new schedule.

    The delete always runs first. If it fails the insert still goes ahead and
    the stale records stay next to the new ones; the failure is logged and
    reported in the result, never retried.
    """
    result = RegenerationResult()
    if plan.is_empty:
        return result

    try:
        result.deleted_count = store.delete_uncompleted_service_records(plan.contract_id)
    except StoreError as e:
        result.delete_succeeded = False
        result.errors.append(str(e))
        logger.warning(
            f"⚠️ Could not delete old service records for contract {plan.contract_id}: {e}"
        )

    if plan.to_insert:
        try:
            inserted = store.insert_service_records(plan.to_insert)
            result.inserted_count = len(inserted)
        except StoreError as e:
            result.insert_succeeded = False
            result.errors.append(str(e))
            logger.error(f"❌ Could not insert new service schedule for contract {plan.contract_id}: {e}")

    logger.info(
        f"🔁 Regenerated schedule for contract {plan.contract_id}: "
        f"deleted={result.deleted_count}, inserted={result.inserted_count}"
    )
    return result


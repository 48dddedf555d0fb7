"""Schedule service - Service schedule views, completion and notes"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...clock import Clock, SystemClock
from ...config import PERSIST_UNMATERIALIZED_NOTES
from ...models import Contract
from ...utils.sanitization import clean_text
from ..contracts.repository import ContractRepository
from .generator import ContractTerms
from .reconciler import (
    RegenerationResult,
    ScheduleEntry,
    apply_regeneration,
    contract_terms,
    plan_regeneration,
    reconcile,
)
from .repository import ServiceRecordRepository, ServiceRecordStore, StoreError

logger = logging.getLogger(__name__)


class ScheduleService:
    """Service layer for contract service schedules"""

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        store: Optional[ServiceRecordStore] = None,
        persist_unmaterialized_notes: bool = PERSIST_UNMATERIALIZED_NOTES,
    ):
        self.db = db
        self.clock = clock or SystemClock()
        self.store = store or ServiceRecordRepository(db)
        self.persist_unmaterialized_notes = persist_unmaterialized_notes

    def get_contract(self, contract_id: int) -> Contract:
        contract = ContractRepository.get_contract_by_id(self.db, contract_id)
        if not contract:
            raise HTTPException(status_code=404, detail="Contract not found")
        return contract

    def get_schedule(self, contract: Contract) -> list[ScheduleEntry]:
        """Merged schedule of generated slots and stored service records"""
        try:
            records = self.store.list_service_records(contract.id)
        except StoreError as e:
            logger.error(f"❌ Failed to load service records for contract {contract.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to load service records")
        return reconcile(contract, records)

    def get_entry(self, contract: Contract, period_number: int, year: int) -> ScheduleEntry:
        for entry in self.get_schedule(contract):
            if entry.key == (period_number, year):
                return entry
        raise HTTPException(status_code=404, detail="Service not found in contract schedule")

    def set_completion(
        self, contract_id: int, period_number: int, year: int, completed: bool
    ) -> ScheduleEntry:
        """
        Mark a scheduled service as done or not done.

        completed_date is stamped on the transition to done and cleared on the
        transition back. A slot with no stored record is inserted; otherwise the
        record is updated in place. Both paths leave the same stored shape.
        """
        contract = self.get_contract(contract_id)
        entry = self.get_entry(contract, period_number, year)

        if completed and not entry.completed:
            entry.completed_date = self.clock.today()
        elif not completed:
            entry.completed_date = None
        entry.completed = completed

        try:
            if entry.materialized:
                self.store.update_service_record(
                    entry.record_id,
                    completed=entry.completed,
                    completed_date=entry.completed_date,
                )
            else:
                (record,) = self.store.insert_service_records([entry.to_record()])
                entry.record_id = record.id
        except StoreError as e:
            logger.error(f"❌ Failed to update service record {entry.key} of contract {contract_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update service record")

        logger.info(
            f"✅ Contract {contract_id} service {entry.period_label} "
            f"{'completed' if completed else 'unmarked'}"
        )
        return entry

    def update_notes(self, contract_id: int, period_number: int, year: int, notes: str) -> ScheduleEntry:
        """
        Edit the notes of a scheduled service, regardless of completion.

        Notes on a slot that has never been stored are only saved when
        persist_unmaterialized_notes is enabled; otherwise they are returned
        but not kept.
        """
        contract = self.get_contract(contract_id)
        entry = self.get_entry(contract, period_number, year)
        entry.notes = clean_text(notes, max_length=5000) or ""

        try:
            if entry.materialized:
                self.store.update_service_record(entry.record_id, notes=entry.notes)
            elif self.persist_unmaterialized_notes:
                (record,) = self.store.insert_service_records([entry.to_record()])
                entry.record_id = record.id
            else:
                logger.info(
                    f"Notes for unsaved service {entry.period_label} of contract {contract_id} not persisted"
                )
        except StoreError as e:
            logger.error(f"❌ Failed to update notes {entry.key} of contract {contract_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update service notes")

        return entry

    def regenerate(self, contract: Contract, old_terms: ContractTerms) -> Optional[RegenerationResult]:
        """
        Replace the uncompleted part of the schedule after a terms change.
        Returns None when the terms did not change.
        """
        new_terms = contract_terms(contract)
        if old_terms == new_terms:
            return None

        try:
            records = self.store.list_service_records(contract.id)
        except StoreError as e:
            logger.error(f"❌ Failed to load service records for contract {contract.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to regenerate service schedule")

        plan = plan_regeneration(contract.id, records, old_terms, new_terms)
        logger.info(
            f"📅 Contract {contract.id} terms changed, replacing {len(plan.to_delete)} "
            f"uncompleted record(s) with {len(plan.to_insert)} new service(s)"
        )
        return apply_regeneration(self.store, plan)

"""Contract service - Business logic for contract operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...clock import Clock
from ...models import Contract
from ...utils.dates import contract_end_date
from ...utils.sanitization import sanitize_string
from ..scheduling.reconciler import RegenerationResult, contract_terms
from ..scheduling.service import ScheduleService
from .repository import ContractRepository
from .schemas import ContractCreate, ContractUpdate

logger = logging.getLogger(__name__)

# Request field -> column
FIELD_MAP = {
    "customerId": "customer_id",
    "equipmentType": "equipment_type",
    "brand": "brand",
    "model": "model",
    "serialNumber": "serial_number",
    "lastServiceDate": "last_service_date",
    "contractType": "contract_type",
    "contractPeriod": "contract_period",
    "contractStartDate": "contract_start_date",
    "remarks": "remarks",
}

# Columns that may not be cleared by an update
REQUIRED_COLUMNS = {"customer_id", "equipment_type", "brand", "contract_type", "contract_period"}


class ContractService:
    """Service layer for contract business logic"""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.repo = ContractRepository()
        self.schedules = ScheduleService(db, clock)

    def get_contracts(self, customer_id: Optional[int] = None) -> list[Contract]:
        """Get all contracts"""
        return self.repo.get_contracts(self.db, customer_id)

    def get_contract(self, contract_id: int) -> Contract:
        """Get a specific contract"""
        contract = self.repo.get_contract_by_id(self.db, contract_id)
        if not contract:
            raise HTTPException(status_code=404, detail="Contract not found")
        return contract

    def _require_customer(self, customer_id: int) -> None:
        if not self.repo.get_customer_by_id(self.db, customer_id):
            raise HTTPException(status_code=404, detail="Customer not found")

    def create_contract(self, data: ContractCreate) -> Contract:
        """
        Create a new contract.
        Service records are not created here; they appear when the schedule is
        worked on or the terms are edited.
        """
        logger.info(f"📝 Creating contract for customer_id: {data.customerId}")
        self._require_customer(data.customerId)

        contract_data = {FIELD_MAP[k]: v for k, v in data.model_dump().items()}
        contract_data["remarks"] = sanitize_string(data.remarks)
        contract_data["contract_end_date"] = contract_end_date(
            data.contractStartDate, data.contractPeriod
        )

        try:
            return self.repo.create_contract(self.db, **contract_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create contract: {e}")
            raise HTTPException(status_code=500, detail="Failed to add contract")

    def update_contract(
        self, contract_id: int, data: ContractUpdate
    ) -> tuple[Contract, Optional[RegenerationResult]]:
        """
        Update a contract and, when its servicing terms changed, regenerate the
        uncompleted part of its service schedule.
        """
        contract = self.get_contract(contract_id)
        old_terms = contract_terms(contract)

        updates = {}
        for key in data.model_fields_set:
            column = FIELD_MAP[key]
            value = getattr(data, key)
            if value is None and column in REQUIRED_COLUMNS:
                continue
            updates[column] = value

        if "customer_id" in updates and updates["customer_id"] != contract.customer_id:
            self._require_customer(updates["customer_id"])
        if "remarks" in updates:
            updates["remarks"] = sanitize_string(updates["remarks"])

        updates["contract_end_date"] = contract_end_date(
            updates.get("contract_start_date", contract.contract_start_date),
            updates.get("contract_period", contract.contract_period),
        )

        try:
            contract = self.repo.update_contract(self.db, contract, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update contract {contract_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update contract")

        regeneration = self.schedules.regenerate(contract, old_terms)
        if regeneration is not None and regeneration.errors:
            logger.warning(
                f"⚠️ Contract {contract_id} updated but schedule regeneration was incomplete: "
                f"{regeneration.errors}"
            )
        return contract, regeneration

    def delete_contract(self, contract_id: int) -> dict:
        """Delete a contract and its service records"""
        contract = self.get_contract(contract_id)
        try:
            self.repo.delete_contract(self.db, contract)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete contract {contract_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete contract")

        logger.info(f"🗑️ Deleted contract {contract_id}")
        return {"message": "Contract deleted successfully"}

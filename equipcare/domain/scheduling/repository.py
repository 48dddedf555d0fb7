"""Service record repository - Database operations for persisted service slots"""

import logging
from typing import Iterable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import ServiceRecord

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A read or write against the service record store failed"""


class ServiceRecordStore(Protocol):
    """What the schedule reconciler needs from persistence"""

    def list_service_records(self, contract_id: int) -> list[ServiceRecord]: ...

    def insert_service_records(self, records: Iterable[ServiceRecord]) -> list[ServiceRecord]: ...

    def update_service_record(self, record_id: int, **fields) -> ServiceRecord: ...

    def delete_uncompleted_service_records(self, contract_id: int) -> int: ...


class ServiceRecordRepository:
    """
    SQLAlchemy implementation of ServiceRecordStore.
    Every call commits on its own; there is no transaction spanning calls.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_service_records(self, contract_id: int) -> list[ServiceRecord]:
        """Get all service records of a contract ordered by due date"""
        try:
            return (
                self.db.query(ServiceRecord)
                .filter(ServiceRecord.contract_id == contract_id)
                .order_by(ServiceRecord.due_date, ServiceRecord.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Could not load service records for contract {contract_id}") from e

    def insert_service_records(self, records: Iterable[ServiceRecord]) -> list[ServiceRecord]:
        """Insert a batch of service records in a single commit"""
        records = list(records)
        try:
            self.db.add_all(records)
            self.db.commit()
            for record in records:
                self.db.refresh(record)
            return records
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Could not insert {len(records)} service record(s)") from e

    def update_service_record(self, record_id: int, **fields) -> ServiceRecord:
        """Update fields of one service record in place"""
        try:
            record = self.db.query(ServiceRecord).filter(ServiceRecord.id == record_id).first()
            if record is None:
                raise StoreError(f"Service record {record_id} no longer exists")
            for key, value in fields.items():
                if hasattr(record, key):
                    setattr(record, key, value)
            self.db.commit()
            self.db.refresh(record)
            return record
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Could not update service record {record_id}") from e

    def delete_uncompleted_service_records(self, contract_id: int) -> int:
        """Delete every service record of a contract that is not completed. Returns count."""
        try:
            deleted = (
                self.db.query(ServiceRecord)
                .filter(
                    ServiceRecord.contract_id == contract_id,
                    ServiceRecord.completed.is_(False),
                )
                .delete(synchronize_session="fetch")
            )
            self.db.commit()
            return deleted
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(
                f"Could not delete uncompleted service records for contract {contract_id}"
            ) from e

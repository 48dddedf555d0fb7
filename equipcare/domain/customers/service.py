"""Customer service - Business logic for customer operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

# Request field -> column
FIELD_MAP = {
    "company": "company",
    "contactPerson": "contact_person",
    "email": "email",
    "phone": "phone",
    "address": "address",
}


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()

    def get_customers(self) -> list[Customer]:
        """Get all customers"""
        return self.repo.get_customers(self.db)

    def get_contract_counts(self) -> dict[int, int]:
        return self.repo.get_contract_counts(self.db)

    def get_customer(self, customer_id: int) -> Customer:
        """Get a specific customer"""
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def create_customer(self, data: CustomerCreate) -> Customer:
        """Create a new customer"""
        logger.info(f"📥 Creating customer: {data.company}")
        customer_data = {FIELD_MAP[k]: v for k, v in data.model_dump().items()}
        try:
            return self.repo.create_customer(self.db, **customer_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create customer: {e}")
            raise HTTPException(status_code=500, detail="Failed to add customer")

    def update_customer(self, customer_id: int, data: CustomerUpdate) -> Customer:
        """Update the fields that were sent"""
        customer = self.get_customer(customer_id)

        updates = {}
        for key in data.model_fields_set:
            value = getattr(data, key)
            # Required columns can't be cleared
            if value is None and key in ("company", "contactPerson"):
                continue
            updates[FIELD_MAP[key]] = value

        try:
            return self.repo.update_customer(self.db, customer, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update customer {customer_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update customer")

    def delete_customer(self, customer_id: int) -> dict:
        """Delete a customer and everything it owns"""
        customer = self.get_customer(customer_id)
        try:
            self.repo.delete_customer(self.db, customer)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete customer {customer_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete customer")

        logger.info(f"🗑️ Deleted customer {customer_id} with all associated contracts")
        return {"message": "Customer deleted successfully"}

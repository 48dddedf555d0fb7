"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Contract, Customer


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def get_customers(db: Session) -> list[Customer]:
        """Get all customers ordered by company name"""
        return db.query(Customer).order_by(Customer.company).all()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
        """Get a specific customer by ID"""
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def get_contract_counts(db: Session) -> dict[int, int]:
        """Number of contracts (pieces of equipment) per customer"""
        rows = (
            db.query(Contract.customer_id, func.count(Contract.id))
            .group_by(Contract.customer_id)
            .all()
        )
        return {customer_id: count for customer_id, count in rows}

    @staticmethod
    def create_customer(db: Session, **customer_data) -> Customer:
        """Create a new customer"""
        customer = Customer(**customer_data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def update_customer(db: Session, customer: Customer, **updates) -> Customer:
        """Update a customer with provided fields"""
        for key, value in updates.items():
            if hasattr(customer, key):
                setattr(customer, key, value)

        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def delete_customer(db: Session, customer: Customer) -> None:
        """Delete a customer together with its contracts and their service records"""
        db.delete(customer)
        db.commit()

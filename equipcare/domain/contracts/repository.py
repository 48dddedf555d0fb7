"""Contract repository - Database operations for contracts"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Contract, Customer


class ContractRepository:
    """Repository for contract database operations"""

    @staticmethod
    def get_contracts(db: Session, customer_id: Optional[int] = None) -> list[Contract]:
        """Get all contracts, newest first, with their customers"""
        query = db.query(Contract).options(joinedload(Contract.customer))

        if customer_id:
            query = query.filter(Contract.customer_id == customer_id)

        return query.order_by(Contract.created_at.desc(), Contract.id.desc()).all()

    @staticmethod
    def get_contract_by_id(db: Session, contract_id: int) -> Optional[Contract]:
        """Get a specific contract by ID"""
        return db.query(Contract).filter(Contract.id == contract_id).first()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
        """Get a customer by ID"""
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def create_contract(db: Session, **contract_data) -> Contract:
        """Create a new contract"""
        contract = Contract(**contract_data)
        db.add(contract)
        db.commit()
        db.refresh(contract)
        return contract

    @staticmethod
    def update_contract(db: Session, contract: Contract, **updates) -> Contract:
        """Update a contract with provided fields"""
        for key, value in updates.items():
            if hasattr(contract, key):
                setattr(contract, key, value)

        db.commit()
        db.refresh(contract)
        return contract

    @staticmethod
    def delete_contract(db: Session, contract: Contract) -> None:
        """Delete a contract together with its service records"""
        db.delete(contract)
        db.commit()

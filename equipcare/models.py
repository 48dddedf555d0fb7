"""
Customer, contract and service record models
"""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .utils.dates import as_date


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    company = Column(String(255), nullable=False, index=True)
    contact_person = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(1000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Deleting a customer removes all of its contracts (and their service records)
    contracts = relationship(
        "Contract",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Equipment under contract
    equipment_type = Column(String(100), nullable=False)  # Heated Dryer, Compressor, ...
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=True)
    serial_number = Column(String(100), nullable=True)
    last_service_date = Column(Date, nullable=True)

    # Servicing terms - any change to these regenerates the service schedule
    contract_type = Column(String(100), nullable=False)  # Quarterly / Half-year / Annual Service
    contract_period = Column(Integer, nullable=False)  # Total duration in months
    contract_start_date = Column(Date, nullable=True)
    # Always derived from start date + period, never set directly by clients
    contract_end_date = Column(Date, nullable=True)

    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="contracts")
    service_records = relationship(
        "ServiceRecord",
        back_populates="contract",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def effective_start_date(self):
        """Schedule anchor: the contract start date, or the day the contract was created"""
        return self.contract_start_date or as_date(self.created_at)


class ServiceRecord(Base):
    """A persisted service slot of a contract's schedule, keyed by (period_number, year)"""

    __tablename__ = "service_records"

    id = Column(Integer, primary_key=True, index=True)
    contract_id = Column(
        Integer, ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    due_date = Column(Date, nullable=False)
    period_number = Column(Integer, nullable=False)  # Quarter 1-4, half 1-2, or 1 for annual
    year = Column(Integer, nullable=False)

    completed = Column(Boolean, default=False, nullable=False)
    completed_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    contract = relationship("Contract", back_populates="service_records")

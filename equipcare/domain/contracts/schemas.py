"""Contract domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...utils.sanitization import clean_text
from ..scheduling.schemas import RegenerationResponse


def _required_text(v):
    v = clean_text(v, max_length=100)
    if not v:
        raise ValueError("This field is required")
    return v


class ContractCreate(BaseModel):
    """Schema for creating a new contract. The end date is always derived."""

    customerId: int
    equipmentType: str
    brand: str
    model: Optional[str] = None
    serialNumber: Optional[str] = None
    lastServiceDate: Optional[date] = None
    contractType: str
    contractPeriod: int = Field(..., gt=0, description="Contract duration in months")
    contractStartDate: Optional[date] = None
    remarks: Optional[str] = Field(None, max_length=5000)

    @field_validator("equipmentType", "brand", "contractType")
    @classmethod
    def validate_required(cls, v):
        return _required_text(v)

    @field_validator("model", "serialNumber")
    @classmethod
    def validate_optional(cls, v):
        return clean_text(v, max_length=100)


class ContractUpdate(BaseModel):
    """Schema for updating an existing contract"""

    customerId: Optional[int] = None
    equipmentType: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    serialNumber: Optional[str] = None
    lastServiceDate: Optional[date] = None
    contractType: Optional[str] = None
    contractPeriod: Optional[int] = Field(None, gt=0)
    contractStartDate: Optional[date] = None
    remarks: Optional[str] = Field(None, max_length=5000)

    @field_validator("equipmentType", "brand", "contractType")
    @classmethod
    def validate_not_blank(cls, v):
        if v is None:
            return v
        return _required_text(v)

    @field_validator("model", "serialNumber")
    @classmethod
    def validate_optional(cls, v):
        return clean_text(v, max_length=100)


class ContractResponse(BaseModel):
    """Schema for contract response"""

    id: int
    customerId: int
    customerName: str
    contactPerson: Optional[str] = None
    equipmentType: str
    brand: str
    model: Optional[str] = None
    serialNumber: Optional[str] = None
    lastServiceDate: Optional[date] = None
    contractType: str
    contractPeriod: int
    contractStartDate: Optional[date] = None
    contractEndDate: Optional[date] = None
    remarks: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    # Only set when an update changed the servicing terms
    regeneration: Optional[RegenerationResponse] = None


class ContractOptions(BaseModel):
    """Values offered by the contract forms"""

    equipmentTypes: list[str]
    brands: list[str]
    contractTypes: list[str]

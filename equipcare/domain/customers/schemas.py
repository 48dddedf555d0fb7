"""Customer domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...utils.sanitization import clean_text


class CustomerCreate(BaseModel):
    """Schema for creating a new customer"""

    company: str
    contactPerson: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("company", "contactPerson")
    @classmethod
    def validate_required(cls, v):
        v = clean_text(v)
        if not v:
            raise ValueError("This field is required")
        return v

    @field_validator("email", "phone")
    @classmethod
    def validate_optional(cls, v):
        return clean_text(v)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        return clean_text(v, max_length=1000)


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer"""

    company: Optional[str] = None
    contactPerson: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("company", "contactPerson")
    @classmethod
    def validate_not_blank(cls, v):
        if v is None:
            return v
        v = clean_text(v)
        if not v:
            raise ValueError("This field cannot be blank")
        return v

    @field_validator("email", "phone")
    @classmethod
    def validate_optional(cls, v):
        return clean_text(v)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        return clean_text(v, max_length=1000)


class CustomerResponse(BaseModel):
    """Schema for customer response"""

    id: int
    company: str
    contactPerson: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    contractCount: int = 0
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

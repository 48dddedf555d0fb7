"""Customer router - FastAPI endpoints for customer operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Customer
from .schemas import CustomerCreate, CustomerResponse, CustomerUpdate
from .service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Customers"])


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


def customer_response(customer: Customer, contract_count: int = 0) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        company=customer.company,
        contactPerson=customer.contact_person,
        email=customer.email,
        phone=customer.phone,
        address=customer.address,
        contractCount=contract_count,
        createdAt=customer.created_at,
        updatedAt=customer.updated_at,
    )


@router.get("", response_model=list[CustomerResponse])
async def get_customers(service: CustomerService = Depends(get_customer_service)):
    """Get all customers with the number of contracts each holds"""
    counts = service.get_contract_counts()
    return [customer_response(c, counts.get(c.id, 0)) for c in service.get_customers()]


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    """Get a specific customer"""
    customer = service.get_customer(customer_id)
    return customer_response(customer, len(customer.contracts))


@router.post("", response_model=CustomerResponse)
async def create_customer(
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer"""
    return customer_response(service.create_customer(data))


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    """Update a customer"""
    customer = service.update_customer(customer_id, data)
    return customer_response(customer, len(customer.contracts))


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer and all associated contracts"""
    return service.delete_customer(customer_id)

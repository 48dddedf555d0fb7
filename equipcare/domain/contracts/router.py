"""Contract router - FastAPI endpoints for contract operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...clock import Clock, get_clock
from ...constants import BRANDS, CONTRACT_TYPES, EQUIPMENT_TYPES
from ...database import get_db
from ...models import Contract
from ..scheduling.reconciler import RegenerationResult
from ..scheduling.schemas import RegenerationResponse
from .schemas import ContractCreate, ContractOptions, ContractResponse, ContractUpdate
from .service import ContractService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["Contracts"])


def get_contract_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> ContractService:
    """Dependency injection for ContractService"""
    return ContractService(db, clock)


def regeneration_response(result: Optional[RegenerationResult]) -> Optional[RegenerationResponse]:
    if result is None:
        return None
    return RegenerationResponse(
        deleteSucceeded=result.delete_succeeded,
        insertSucceeded=result.insert_succeeded,
        deletedCount=result.deleted_count,
        insertedCount=result.inserted_count,
        partial=result.partial,
        errors=result.errors,
    )


def contract_response(
    contract: Contract, regeneration: Optional[RegenerationResult] = None
) -> ContractResponse:
    customer = contract.customer
    return ContractResponse(
        id=contract.id,
        customerId=contract.customer_id,
        customerName=customer.company if customer else "Unknown",
        contactPerson=customer.contact_person if customer else None,
        equipmentType=contract.equipment_type,
        brand=contract.brand,
        model=contract.model,
        serialNumber=contract.serial_number,
        lastServiceDate=contract.last_service_date,
        contractType=contract.contract_type,
        contractPeriod=contract.contract_period,
        contractStartDate=contract.contract_start_date,
        contractEndDate=contract.contract_end_date,
        remarks=contract.remarks,
        createdAt=contract.created_at,
        updatedAt=contract.updated_at,
        regeneration=regeneration_response(regeneration),
    )


@router.get("", response_model=list[ContractResponse])
async def get_contracts(
    service: ContractService = Depends(get_contract_service),
    customer_id: Optional[int] = Query(None, description="Filter contracts by customer ID"),
):
    """Get all contracts, newest first"""
    return [contract_response(c) for c in service.get_contracts(customer_id)]


@router.get("/options", response_model=ContractOptions)
async def get_contract_options():
    """Equipment types, brands and contract types offered by the contract forms"""
    return ContractOptions(
        equipmentTypes=EQUIPMENT_TYPES,
        brands=BRANDS,
        contractTypes=CONTRACT_TYPES,
    )


@router.post("", response_model=ContractResponse)
async def create_contract(
    data: ContractCreate,
    service: ContractService = Depends(get_contract_service),
):
    """Create a new contract"""
    return contract_response(service.create_contract(data))


@router.get("/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    """Get a specific contract"""
    return contract_response(service.get_contract(contract_id))


@router.patch("/{contract_id}", response_model=ContractResponse)
async def update_contract(
    contract_id: int,
    data: ContractUpdate,
    service: ContractService = Depends(get_contract_service),
):
    """Update a contract; changing type, period or start date regenerates its schedule"""
    contract, regeneration = service.update_contract(contract_id, data)
    return contract_response(contract, regeneration)


@router.delete("/{contract_id}")
async def delete_contract(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    """Delete a contract and its service records"""
    return service.delete_contract(contract_id)

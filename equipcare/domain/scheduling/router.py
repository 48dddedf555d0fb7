"""Schedule router - FastAPI endpoints for contract service schedules"""

import logging

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from ...clock import Clock, get_clock
from ...database import get_db
from .reconciler import ScheduleEntry
from .schemas import (
    CompletionUpdate,
    NotesUpdate,
    ScheduleEntryResponse,
    ScheduleResponse,
    ScheduleSummary,
)
from .service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["Schedules"])


def get_schedule_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db, clock)


def entry_response(entry: ScheduleEntry, service: ScheduleService) -> ScheduleEntryResponse:
    return ScheduleEntryResponse(
        periodNumber=entry.period_number,
        year=entry.year,
        periodLabel=entry.period_label,
        dueDate=entry.due_date,
        completed=entry.completed,
        completedDate=entry.completed_date,
        notes=entry.notes,
        isOverdue=entry.is_overdue(service.clock.today()),
        materialized=entry.materialized,
        recordId=entry.record_id,
    )


@router.get("/{contract_id}/schedule", response_model=ScheduleResponse)
async def get_contract_schedule(
    contract_id: int,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get the service schedule of a contract merged with recorded services"""
    contract = service.get_contract(contract_id)
    services = [entry_response(e, service) for e in service.get_schedule(contract)]
    completed = sum(1 for s in services if s.completed)

    return ScheduleResponse(
        contractId=contract.id,
        customerName=contract.customer.company if contract.customer else None,
        equipmentType=contract.equipment_type,
        brand=contract.brand,
        contractType=contract.contract_type,
        contractPeriod=contract.contract_period,
        startDate=contract.effective_start_date,
        endDate=contract.contract_end_date,
        services=services,
        summary=ScheduleSummary(
            total=len(services),
            completed=completed,
            pending=len(services) - completed,
            overdue=sum(1 for s in services if s.isOverdue),
        ),
    )


@router.put(
    "/{contract_id}/schedule/{year}/{period_number}/completion",
    response_model=ScheduleEntryResponse,
)
async def set_service_completion(
    contract_id: int,
    year: int,
    data: CompletionUpdate,
    period_number: int = Path(..., ge=1, le=4),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Mark a scheduled service as completed or not completed"""
    entry = service.set_completion(contract_id, period_number, year, data.completed)
    return entry_response(entry, service)


@router.put(
    "/{contract_id}/schedule/{year}/{period_number}/notes",
    response_model=ScheduleEntryResponse,
)
async def update_service_notes(
    contract_id: int,
    year: int,
    data: NotesUpdate,
    period_number: int = Path(..., ge=1, le=4),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Update the notes of a scheduled service"""
    entry = service.update_notes(contract_id, period_number, year, data.notes)
    return entry_response(entry, service)

"""Schedule domain schemas - Pydantic models for validation"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ScheduleEntryResponse(BaseModel):
    """One service slot of a contract schedule"""

    periodNumber: int
    year: int
    periodLabel: str
    dueDate: date
    completed: bool
    completedDate: Optional[date] = None
    notes: str
    isOverdue: bool
    materialized: bool
    recordId: Optional[int] = None


class ScheduleSummary(BaseModel):
    total: int
    completed: int
    pending: int
    overdue: int


class ScheduleResponse(BaseModel):
    """Service schedule of a contract"""

    contractId: int
    customerName: Optional[str] = None
    equipmentType: str
    brand: str
    contractType: str
    contractPeriod: int
    startDate: date
    endDate: Optional[date] = None
    services: list[ScheduleEntryResponse]
    summary: ScheduleSummary


class CompletionUpdate(BaseModel):
    completed: bool


class NotesUpdate(BaseModel):
    notes: str = Field("", max_length=5000)


class RegenerationResponse(BaseModel):
    """Outcome of replacing a schedule after a contract terms change"""

    deleteSucceeded: bool
    insertSucceeded: bool
    deletedCount: int
    insertedCount: int
    partial: bool
    errors: list[str] = []

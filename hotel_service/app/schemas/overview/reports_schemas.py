from datetime import date, datetime
from uuid import UUID
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, model_validator

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.revenue_enum import ReportType


class ReportRequest(EmptyStringModel):
    type: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    hotel_id: Optional[UUID] = None


class ReportSaveRequest(BaseModel):
    type: ReportType
    start_date: date
    end_date: date
    hotel_id: Optional[UUID] = None
    name: Optional[str] = Field(None, max_length=200)

    @model_validator(mode="after")
    def check_period(self):
        if self.start_date > self.end_date:
            raise ValueError("Start date must not be after end date")
        return self


class ReportOut(BaseModel):
    type: ReportType
    start_date: date
    end_date: date
    hotel_id: Optional[UUID] = None
    data: Dict[str, Any]


class SavedReportOut(BaseModel):
    id: UUID
    name: Optional[str] = None
    type: ReportType
    start_date: date
    end_date: date
    hotel_id: Optional[UUID] = None
    created_by_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    data: Dict[str, Any]

    model_config = {"from_attributes": True}


class SavedReportListResponse(BaseModel):
    reports: List[SavedReportOut]
    total: int

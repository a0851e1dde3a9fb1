from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_role
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.overview import reports_crud
from ...schemas.overview.reports_schemas import (
    ReportOut, ReportRequest, ReportSaveRequest, SavedReportListResponse, SavedReportOut
)

router = APIRouter(prefix="/api/reports", tags=["Reports"],
                   dependencies=[Depends(require_role(UserRole.MANAGER))])


@router.get("", response_model=ReportOut)
def get_report(
    params: ReportRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return reports_crud.get_report(db, current_user, params)


@router.post("", response_model=SavedReportOut)
def save_report(
    request: ReportSaveRequest,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return reports_crud.save_report(db, current_user, request)


@router.get("/saved", response_model=SavedReportListResponse)
def get_saved_reports(
    hotel_id: Optional[UUID] = None,
    type: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return reports_crud.get_saved_reports(db, current_user, hotel_id, type, skip, limit)


@router.get("/saved/{report_id}", response_model=SavedReportOut)
def get_saved_report(
    report_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return reports_crud.get_saved_report(db, current_user, report_id)

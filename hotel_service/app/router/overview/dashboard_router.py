from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_super_admin, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ...crud.overview import dashboard_crud
from ...schemas.overview.dashboard_schemas import ChainOverviewResponse, DashboardStatsResponse

router = APIRouter(prefix="/api/dashboard",
                   tags=["Dashboard"], dependencies=[Depends(validate_current_token)])


@router.get("/stats", response_model=DashboardStatsResponse)
def get_stats(
    hotel_id: Optional[UUID] = None,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return dashboard_crud.get_dashboard_stats(db, current_user, hotel_id)


@router.get("/chain", response_model=ChainOverviewResponse)
def get_chain(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_super_admin)
):
    return dashboard_crud.get_chain_overview(db)

from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_role, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.hospitality import guests_crud as crud
from ...schemas.hospitality.guests_schemas import (
    GuestCreate, GuestListResponse, GuestOut, GuestRequest
)

router = APIRouter(prefix="/api/guests", tags=["Guests"],
                   dependencies=[Depends(validate_current_token)])


@router.get("", response_model=GuestListResponse)
def get_guests_endpoint(
    params: GuestRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_guests(db, current_user, params)


@router.post("", response_model=GuestOut)
def create_guest_endpoint(
    guest: GuestCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.RECEPTIONIST))
):
    return crud.create_guest(db, guest)


@router.get("/{guest_id}", response_model=GuestOut)
def get_guest_endpoint(
    guest_id: UUID,
    db: Session = Depends(get_db)
):
    return crud.get_guest(db, guest_id)

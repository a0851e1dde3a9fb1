from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_role, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.hospitality import rooms_crud as crud
from ...schemas.hospitality.rooms_schemas import (
    RoomCreate,
    RoomListResponse,
    RoomOut,
    RoomOverview,
    RoomRequest,
    RoomUpdate,
)

router = APIRouter(prefix="/api/rooms", tags=["Rooms"],
                   dependencies=[Depends(validate_current_token)])


# ---------------- List Rooms ----------------
@router.get("", response_model=RoomListResponse)
def get_rooms_endpoint(
    params: RoomRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_rooms(db, current_user, params)


@router.get("/overview", response_model=RoomOverview)
def get_room_overview_endpoint(
    hotel_id: Optional[UUID] = None,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_room_overview(db, current_user, hotel_id)


# ----------------- Create Room -----------------
@router.post("", response_model=RoomOut)
def create_room_endpoint(
    room: RoomCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return crud.create_room(db, current_user, room)


@router.get("/{room_id}", response_model=RoomOut)
def get_room_endpoint(
    room_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_room_or_404(db, current_user, room_id)


# ----------------- Update Room -----------------
@router.put("/{room_id}", response_model=RoomOut)
def update_room_endpoint(
    room_id: UUID,
    room: RoomUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.RECEPTIONIST))
):
    return crud.update_room(db, current_user, room_id, room)


# ---------------- Delete Room ----------------
@router.delete("/{room_id}")
def delete_room_endpoint(
    room_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return crud.delete_room(db, current_user, room_id)

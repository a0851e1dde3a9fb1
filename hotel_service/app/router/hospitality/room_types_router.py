from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_role, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.hospitality import room_types_crud as crud
from ...schemas.hospitality.room_types_schemas import (
    RoomTypeCreate,
    RoomTypeListResponse,
    RoomTypeOut,
    RoomTypeRequest,
    RoomTypeUpdate,
)

router = APIRouter(prefix="/api/room-types", tags=["Room Types"],
                   dependencies=[Depends(validate_current_token)])


@router.get("", response_model=RoomTypeListResponse)
def get_room_types_endpoint(
    params: RoomTypeRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_room_types(db, current_user, params)


@router.post("", response_model=RoomTypeOut)
def create_room_type_endpoint(
    room_type: RoomTypeCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return crud.create_room_type(db, current_user, room_type)


@router.get("/{room_type_id}", response_model=RoomTypeOut)
def get_room_type_endpoint(
    room_type_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_room_type(db, current_user, room_type_id)


@router.put("/{room_type_id}", response_model=RoomTypeOut)
def update_room_type_endpoint(
    room_type_id: UUID,
    room_type: RoomTypeUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return crud.update_room_type(db, current_user, room_type_id, room_type)


@router.delete("/{room_type_id}")
def delete_room_type_endpoint(
    room_type_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return crud.delete_room_type(db, current_user, room_type_id)

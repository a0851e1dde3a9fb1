from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.auth import can_access_hotel, hotel_scope_filters, resolve_target_hotel
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, forbidden, not_found
from shared.utils.app_status_code import AppStatusCode
from ...models.hospitality import Hotel, Room, RoomType
from ...schemas.hospitality.room_types_schemas import (
    RoomTypeCreate, RoomTypeOut, RoomTypeRequest, RoomTypeUpdate
)


def _room_type_out(room_type: RoomType, room_count: int) -> RoomTypeOut:
    out = RoomTypeOut.model_validate(room_type)
    out.room_count = room_count
    return out


def _room_count(db: Session, room_type_id: UUID, active_only: bool = True) -> int:
    filters = [Room.room_type_id == room_type_id]
    if active_only:
        filters.append(Room.is_active == True)
    return db.query(func.count(Room.id)).filter(*filters).scalar() or 0


def get_room_type_or_404(db: Session, current_user: UserToken, room_type_id: UUID) -> RoomType:
    room_type = db.query(RoomType).filter(RoomType.id == room_type_id).first()
    if not room_type:
        return not_found("Room type")
    if not can_access_hotel(current_user, room_type.hotel_id):
        return forbidden()
    return room_type


# ----------------- Get All Room Types -----------------
def get_room_types(db: Session, current_user: UserToken, params: RoomTypeRequest):
    filters = hotel_scope_filters(RoomType.hotel_id, current_user, params.hotel_id)
    if params.search:
        filters.append(RoomType.name.ilike(f"%{params.search}%"))

    room_count = (
        db.query(Room.room_type_id, func.count(Room.id).label("room_count"))
        .filter(Room.is_active == True)
        .group_by(Room.room_type_id)
        .subquery()
    )

    rows = (
        db.query(RoomType, func.coalesce(room_count.c.room_count, 0))
        .outerjoin(room_count, room_count.c.room_type_id == RoomType.id)
        .filter(*filters)
        .order_by(RoomType.base_rate.asc())
        .all()
    )

    return {
        "room_types": [_room_type_out(rt, count) for rt, count in rows],
        "total": len(rows),
    }


# ----------------- Get Single Room Type -----------------
def get_room_type(db: Session, current_user: UserToken, room_type_id: UUID):
    room_type = get_room_type_or_404(db, current_user, room_type_id)
    return _room_type_out(room_type, _room_count(db, room_type.id))


# ----------------- Create Room Type -----------------
def create_room_type(db: Session, current_user: UserToken, room_type: RoomTypeCreate):
    hotel_id = resolve_target_hotel(current_user, room_type.hotel_id)
    if not db.query(Hotel).filter(Hotel.id == hotel_id).first():
        return not_found("Hotel")

    db_room_type = RoomType(
        hotel_id=hotel_id,
        **room_type.model_dump(exclude={"hotel_id"})
    )
    db.add(db_room_type)
    db.commit()
    db.refresh(db_room_type)
    return _room_type_out(db_room_type, 0)


# ----------------- Update Room Type -----------------
def update_room_type(db: Session, current_user: UserToken, room_type_id: UUID, room_type: RoomTypeUpdate):
    db_room_type = get_room_type_or_404(db, current_user, room_type_id)

    # existing reservations keep the rate they were booked with
    update_data = room_type.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(db_room_type, key, value)

    db.commit()
    db.refresh(db_room_type)
    return _room_type_out(db_room_type, _room_count(db, db_room_type.id))


# ----------------- Delete Room Type -----------------
def delete_room_type(db: Session, current_user: UserToken, room_type_id: UUID):
    db_room_type = get_room_type_or_404(db, current_user, room_type_id)

    # soft-deleted rooms still point at their type
    if _room_count(db, db_room_type.id, active_only=False):
        return error_response(
            message="Cannot delete a room type that has rooms",
            status_code=str(AppStatusCode.OPERATION_ERROR),
            http_status=400
        )

    db.delete(db_room_type)
    db.commit()
    return {"message": "Room type deleted successfully"}

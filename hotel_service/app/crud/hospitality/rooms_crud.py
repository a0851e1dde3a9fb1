from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from shared.core.auth import can_access_hotel, hotel_scope_filters, resolve_target_hotel
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, forbidden, not_found
from shared.utils.app_status_code import AppStatusCode
from ...enum.hospitality_enum import RoomStatus
from ...models.hospitality import Hotel, Room, RoomType
from ...schemas.hospitality.rooms_schemas import RoomCreate, RoomOut, RoomRequest, RoomUpdate
from . import reservation_lifecycle as lifecycle

# statuses a person may set by hand, the rest belong to the reservation lifecycle
MANUAL_STATUSES = {RoomStatus.AVAILABLE, RoomStatus.CLEANING, RoomStatus.MAINTENANCE}


def _duplicate_number(number: str):
    return error_response(
        message=f"Room number '{number}' already exists in this hotel",
        status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
        http_status=400
    )


def _number_taken(db: Session, hotel_id: UUID, number: str, exclude_id: UUID = None) -> bool:
    query = db.query(Room.id).filter(Room.hotel_id == hotel_id, Room.number == number)
    if exclude_id:
        query = query.filter(Room.id != exclude_id)
    return query.first() is not None


def _ensure_manual_status(status: RoomStatus):
    if status not in MANUAL_STATUSES:
        return error_response(
            message=f"Room status {status.value} is managed by reservations",
            status_code=str(AppStatusCode.INVALID_INPUT),
            http_status=400
        )


def _room_type_in_hotel(db: Session, room_type_id: UUID, hotel_id: UUID) -> RoomType:
    room_type = db.query(RoomType).filter(RoomType.id == room_type_id).first()
    if not room_type:
        return not_found("Room type")
    if room_type.hotel_id != hotel_id:
        return error_response(
            message="Room type does not belong to this hotel",
            status_code=str(AppStatusCode.INVALID_INPUT),
            http_status=400
        )
    return room_type


def get_room_or_404(db: Session, current_user: UserToken, room_id: UUID) -> Room:
    room = (
        db.query(Room)
        .options(joinedload(Room.room_type))
        .filter(Room.id == room_id, Room.is_active == True)
        .first()
    )
    if not room:
        return not_found("Room")
    if not can_access_hotel(current_user, room.hotel_id):
        return forbidden()
    return room


# ----------------- Build Filters -----------------
def build_room_filters(current_user: UserToken, params: RoomRequest):
    filters = hotel_scope_filters(Room.hotel_id, current_user, params.hotel_id)
    filters.append(Room.is_active == True)

    if params.status and params.status.lower() != "all":
        filters.append(Room.status == params.status.upper())

    if params.floor is not None:
        filters.append(Room.floor == params.floor)

    if params.room_type_id:
        filters.append(Room.room_type_id == params.room_type_id)

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(Room.number.ilike(search_term), Room.notes.ilike(search_term)))
    return filters


# ----------------- Get All Rooms -----------------
def get_rooms(db: Session, current_user: UserToken, params: RoomRequest):
    filters = build_room_filters(current_user, params)
    base_query = db.query(Room).filter(*filters)
    total = base_query.with_entities(func.count(Room.id)).scalar()

    rooms = (
        base_query
        .options(joinedload(Room.room_type))
        .order_by(Room.floor.asc(), Room.number.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"rooms": [RoomOut.model_validate(r) for r in rooms], "total": total}


# ----------------- Overview -----------------
def get_room_overview(db: Session, current_user: UserToken, hotel_id: UUID = None):
    filters = hotel_scope_filters(Room.hotel_id, current_user, hotel_id)
    rows = (
        db.query(Room.status, func.count(Room.id))
        .filter(*filters, Room.is_active == True)
        .group_by(Room.status)
        .all()
    )
    counts = {status: count for status, count in rows}
    return {
        "totalRooms": sum(counts.values()),
        "available": counts.get(RoomStatus.AVAILABLE.value, 0),
        "reserved": counts.get(RoomStatus.RESERVED.value, 0),
        "occupied": counts.get(RoomStatus.OCCUPIED.value, 0),
        "cleaning": counts.get(RoomStatus.CLEANING.value, 0),
        "maintenance": counts.get(RoomStatus.MAINTENANCE.value, 0),
    }


# ----------------- Create Room -----------------
def create_room(db: Session, current_user: UserToken, room: RoomCreate):
    hotel_id = resolve_target_hotel(current_user, room.hotel_id)
    if not db.query(Hotel).filter(Hotel.id == hotel_id).first():
        return not_found("Hotel")

    _ensure_manual_status(room.status)
    _room_type_in_hotel(db, room.room_type_id, hotel_id)

    if _number_taken(db, hotel_id, room.number):
        return _duplicate_number(room.number)

    db_room = Room(
        hotel_id=hotel_id,
        number=room.number,
        floor=room.floor,
        room_type_id=room.room_type_id,
        status=room.status.value,
        notes=room.notes,
    )
    db.add(db_room)
    db.commit()
    db.refresh(db_room)
    return db_room


# ----------------- Update Room -----------------
def update_room(db: Session, current_user: UserToken, room_id: UUID, room: RoomUpdate):
    db_room = get_room_or_404(db, current_user, room_id)
    update_data = room.model_dump(exclude_unset=True, exclude_none=True)

    if "number" in update_data and update_data["number"] != db_room.number:
        if _number_taken(db, db_room.hotel_id, update_data["number"], exclude_id=db_room.id):
            return _duplicate_number(update_data["number"])

    if "room_type_id" in update_data:
        _room_type_in_hotel(db, update_data["room_type_id"], db_room.hotel_id)

    if "status" in update_data:
        status = RoomStatus(update_data["status"])
        if status.value != db_room.status:
            _ensure_manual_status(status)
            if lifecycle.room_is_held(db, db_room.id):
                return error_response(
                    message="Room status is controlled by an active reservation",
                    status_code=str(AppStatusCode.OPERATION_ERROR),
                    http_status=400
                )
        update_data["status"] = status.value

    for key, value in update_data.items():
        setattr(db_room, key, value)

    db.commit()
    db.refresh(db_room)
    return db_room


# ----------------- Delete Room (Soft) -----------------
def delete_room(db: Session, current_user: UserToken, room_id: UUID):
    db_room = get_room_or_404(db, current_user, room_id)

    if lifecycle.room_has_open_reservations(db, db_room.id):
        return error_response(
            message="Cannot delete a room with open reservations",
            status_code=str(AppStatusCode.OPERATION_ERROR),
            http_status=400
        )

    db_room.is_active = False
    db.commit()
    return {"message": "Room deleted successfully"}

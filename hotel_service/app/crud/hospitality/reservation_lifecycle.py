"""Reservation state machine and the room status side effects it drives.

Room status is a projection of reservation status: CONFIRMED holds rooms
RESERVED, CHECKED_IN holds them OCCUPIED and the terminal states hand them
back as CLEANING or AVAILABLE. Every status-changing write goes through
here so the two never drift apart.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Iterable, List
from uuid import UUID
from sqlalchemy import and_
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from ...enum.hospitality_enum import ReservationStatus, RoomStatus
from ...models.hospitality import Reservation, ReservationRoom, Room

logger = logging.getLogger(__name__)

TRANSITIONS: Dict[ReservationStatus, FrozenSet[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({
        ReservationStatus.CHECKED_IN, ReservationStatus.CANCELLED, ReservationStatus.NO_SHOW}),
    ReservationStatus.CHECKED_IN: frozenset({ReservationStatus.CHECKED_OUT}),
    ReservationStatus.CHECKED_OUT: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.NO_SHOW: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)

# reservations that still claim their rooms for the booked dates
ACTIVE_STATUSES = frozenset({
    ReservationStatus.PENDING, ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN})

# reservations currently holding the physical room
HOLDING_STATUSES = frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN})

# no more edits once a stay is closed
EDIT_LOCKED_STATUSES = frozenset({ReservationStatus.CHECKED_OUT, ReservationStatus.CANCELLED})
CHARGE_LOCKED_STATUSES = frozenset({ReservationStatus.CANCELLED, ReservationStatus.CHECKED_OUT})


def can_transition(current: ReservationStatus, target: ReservationStatus) -> bool:
    return ReservationStatus(target) in TRANSITIONS[ReservationStatus(current)]


def ensure_transition(current: ReservationStatus, target: ReservationStatus):
    if not can_transition(current, target):
        return error_response(
            message=f"Cannot change status from {ReservationStatus(current).value} "
                    f"to {ReservationStatus(target).value}",
            status_code=str(AppStatusCode.INVALID_STATUS_TRANSITION),
            http_status=400
        )


def _set_room_status(db: Session, room_ids: List[UUID], status: RoomStatus, only_from: RoomStatus = None):
    if not room_ids:
        return
    query = db.query(Room).filter(Room.id.in_(room_ids))
    if only_from is not None:
        query = query.filter(Room.status == only_from.value)
    query.update({Room.status: status.value}, synchronize_session=False)


def apply_transition(db: Session, reservation: Reservation, target: ReservationStatus):
    """Move `reservation` to `target` and update its rooms. The caller commits."""
    previous = ReservationStatus(reservation.status)
    target = ReservationStatus(target)
    ensure_transition(previous, target)

    room_ids = [rr.room_id for rr in reservation.rooms]
    now = datetime.now(timezone.utc)

    if target == ReservationStatus.CONFIRMED:
        _set_room_status(db, room_ids, RoomStatus.RESERVED, only_from=RoomStatus.AVAILABLE)
    elif target == ReservationStatus.CHECKED_IN:
        reservation.actual_check_in = now
        _set_room_status(db, room_ids, RoomStatus.OCCUPIED)
    elif target == ReservationStatus.CHECKED_OUT:
        reservation.actual_check_out = now
        _set_room_status(db, room_ids, RoomStatus.CLEANING)
    elif target in (ReservationStatus.CANCELLED, ReservationStatus.NO_SHOW):
        if previous == ReservationStatus.CONFIRMED:
            _set_room_status(db, room_ids, RoomStatus.AVAILABLE, only_from=RoomStatus.RESERVED)

    reservation.status = target.value
    logger.info("Reservation %s: %s -> %s", reservation.code, previous.value, target.value)
    return reservation


def release_rooms(db: Session, reservation: Reservation):
    """Hand back rooms held by a reservation that is about to disappear."""
    room_ids = [rr.room_id for rr in reservation.rooms]
    status = ReservationStatus(reservation.status)
    if status == ReservationStatus.CONFIRMED:
        _set_room_status(db, room_ids, RoomStatus.AVAILABLE, only_from=RoomStatus.RESERVED)
    elif status == ReservationStatus.CHECKED_IN:
        _set_room_status(db, room_ids, RoomStatus.CLEANING, only_from=RoomStatus.OCCUPIED)


def lock_rooms(db: Session, room_ids: Iterable[UUID]) -> List[Room]:
    """SELECT ... FOR UPDATE on the rooms; concurrent bookers of the same room queue here."""
    return (
        db.query(Room)
        .filter(Room.id.in_(list(room_ids)))
        .order_by(Room.id)
        .with_for_update()
        .all()
    )


def find_conflicts(db: Session, room_ids: Iterable[UUID], check_in, check_out, exclude_id: UUID = None):
    """Active reservations on any of the rooms whose stay overlaps [check_in, check_out]."""
    filters = [
        ReservationRoom.room_id.in_(list(room_ids)),
        Reservation.status.in_([s.value for s in ACTIVE_STATUSES]),
        and_(Reservation.check_in_date <= check_out,
             Reservation.check_out_date >= check_in),
    ]
    if exclude_id is not None:
        filters.append(Reservation.id != exclude_id)

    return (
        db.query(Reservation.code, Room.number)
        .join(ReservationRoom, ReservationRoom.reservation_id == Reservation.id)
        .join(Room, Room.id == ReservationRoom.room_id)
        .filter(*filters)
        .all()
    )


def ensure_no_conflicts(db: Session, room_ids, check_in, check_out, exclude_id: UUID = None):
    conflicts = find_conflicts(db, room_ids, check_in, check_out, exclude_id)
    if conflicts:
        rooms = ", ".join(sorted({number for _, number in conflicts}))
        return error_response(
            message=f"Rooms already booked for the selected dates: {rooms}",
            status_code=str(AppStatusCode.ROOM_CONFLICT),
            http_status=400
        )


def room_is_held(db: Session, room_id: UUID) -> bool:
    return db.query(ReservationRoom.id).join(Reservation).filter(
        ReservationRoom.room_id == room_id,
        Reservation.status.in_([s.value for s in HOLDING_STATUSES]),
    ).first() is not None


def room_has_open_reservations(db: Session, room_id: UUID) -> bool:
    return db.query(ReservationRoom.id).join(Reservation).filter(
        ReservationRoom.room_id == room_id,
        Reservation.status.in_([s.value for s in ACTIVE_STATUSES]),
    ).first() is not None

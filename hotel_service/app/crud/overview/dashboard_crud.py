from datetime import date
from typing import Any, Dict
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from shared.core.auth import hotel_scope_filters
from shared.core.schemas import UserToken
from shared.helpers.stats_helper import day_window, money, month_bounds, percent
from ...enum.hospitality_enum import ReservationStatus, RoomStatus
from ...enum.revenue_enum import TransactionType
from ...models.financials.transactions import Transaction
from ...models.hospitality import Hotel, Reservation, ReservationRoom, Room


def _room_status_counts(db: Session, filters) -> Dict[str, int]:
    rows = (
        db.query(Room.status, func.count(Room.id))
        .filter(*filters, Room.is_active == True)
        .group_by(Room.status)
        .all()
    )
    counts = {status.value: 0 for status in RoomStatus}
    counts.update({status: count for status, count in rows})
    return counts


def _payment_sum(db: Session, filters, start=None, end=None):
    query = db.query(func.coalesce(func.sum(Transaction.amount), 0)).filter(
        *filters, Transaction.type == TransactionType.PAYMENT.value)
    if start is not None:
        query = query.filter(Transaction.created_at >= start, Transaction.created_at < end)
    return query.scalar() or 0


# ------------------- Hotel Dashboard -------------------
def get_dashboard_stats(db: Session, current_user: UserToken, hotel_id: UUID = None) -> Dict[str, Any]:
    today = date.today()
    month_start, month_end = month_bounds(today)
    window_start, window_end = day_window(month_start, month_end)

    room_status = _room_status_counts(db, hotel_scope_filters(Room.hotel_id, current_user, hotel_id))
    total_rooms = sum(room_status.values())
    occupied = room_status[RoomStatus.OCCUPIED.value]

    reservation_filters = hotel_scope_filters(Reservation.hotel_id, current_user, hotel_id)
    transaction_filters = hotel_scope_filters(Transaction.hotel_id, current_user, hotel_id)

    today_check_ins = db.query(func.count(Reservation.id)).filter(
        *reservation_filters,
        Reservation.check_in_date == today,
        Reservation.status.in_([ReservationStatus.CONFIRMED.value, ReservationStatus.CHECKED_IN.value])
    ).scalar() or 0

    today_check_outs = db.query(func.count(Reservation.id)).filter(
        *reservation_filters,
        Reservation.check_out_date == today,
        Reservation.status.in_([ReservationStatus.CHECKED_IN.value, ReservationStatus.CHECKED_OUT.value])
    ).scalar() or 0

    pending = db.query(func.count(Reservation.id)).filter(
        *reservation_filters,
        Reservation.status == ReservationStatus.PENDING.value
    ).scalar() or 0

    recent = (
        db.query(Reservation)
        .options(
            joinedload(Reservation.guest),
            selectinload(Reservation.rooms).joinedload(ReservationRoom.room),
        )
        .filter(*reservation_filters)
        .order_by(Reservation.created_at.desc())
        .limit(5)
        .all()
    )

    return {
        "total_rooms": total_rooms,
        "occupied_rooms": occupied,
        "occupancy_rate": percent(occupied, total_rooms),
        "today_check_ins": today_check_ins,
        "today_check_outs": today_check_outs,
        "pending_reservations": pending,
        "monthly_revenue": money(_payment_sum(db, transaction_filters, window_start, window_end)),
        "total_revenue": money(_payment_sum(db, transaction_filters)),
        "room_status": room_status,
        "recent_reservations": [
            {
                "id": r.id,
                "code": r.code,
                "guest_name": r.guest.full_name,
                "rooms": ", ".join(rr.room.number for rr in r.rooms),
                "status": r.status,
                "check_in_date": r.check_in_date,
                "check_out_date": r.check_out_date,
                "total_amount": money(r.total_amount),
                "created_at": r.created_at,
            }
            for r in recent
        ],
    }


# ------------------- Chain Overview -------------------
def get_chain_overview(db: Session) -> Dict[str, Any]:
    month_start, month_end = month_bounds()
    window_start, window_end = day_window(month_start, month_end)

    hotels = db.query(Hotel).filter(Hotel.is_active == True).order_by(Hotel.name.asc()).all()

    hotel_stats = []
    for hotel in hotels:
        room_status = _room_status_counts(db, [Room.hotel_id == hotel.id])
        total_rooms = sum(room_status.values())
        occupied = room_status[RoomStatus.OCCUPIED.value]

        monthly_reservations = db.query(func.count(Reservation.id)).filter(
            Reservation.hotel_id == hotel.id,
            Reservation.created_at >= window_start,
            Reservation.created_at < window_end
        ).scalar() or 0

        checked_in = db.query(func.count(Reservation.id)).filter(
            Reservation.hotel_id == hotel.id,
            Reservation.status == ReservationStatus.CHECKED_IN.value
        ).scalar() or 0

        hotel_stats.append({
            "id": hotel.id,
            "name": hotel.name,
            "code": hotel.code,
            "city": hotel.city,
            "total_rooms": total_rooms,
            "occupied_rooms": occupied,
            "occupancy_rate": percent(occupied, total_rooms),
            "monthly_revenue": money(_payment_sum(
                db, [Transaction.hotel_id == hotel.id], window_start, window_end)),
            "monthly_reservations": monthly_reservations,
            "checked_in": checked_in,
        })

    total_rooms = sum(h["total_rooms"] for h in hotel_stats)
    occupied_rooms = sum(h["occupied_rooms"] for h in hotel_stats)

    return {
        "hotels": hotel_stats,
        "totals": {
            "hotels": len(hotel_stats),
            "total_rooms": total_rooms,
            "occupied_rooms": occupied_rooms,
            "monthly_revenue": money(sum(h["monthly_revenue"] for h in hotel_stats)),
            "monthly_reservations": sum(h["monthly_reservations"] for h in hotel_stats),
            "checked_in": sum(h["checked_in"] for h in hotel_stats),
            "average_occupancy": percent(occupied_rooms, total_rooms),
        },
    }

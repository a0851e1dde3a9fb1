import logging
import uuid
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from shared.core.auth import can_access_hotel, hotel_scope_filters, resolve_target_hotel
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, forbidden, not_found
from shared.utils.app_status_code import AppStatusCode
from ...enum.hospitality_enum import ReservationStatus
from ...enum.revenue_enum import PaymentStatus, TransactionType
from ...models.hospitality import Charge, Guest, Reservation, ReservationRoom, Room
from ...models.financials.transactions import Transaction
from ...schemas.hospitality.reservations_schemas import (
    ChargeCreate,
    ChargeOut,
    PaymentRef,
    ReservationCreate,
    ReservationRequest,
    ReservationStatusUpdate,
    ReservationUpdate,
)
from . import reservation_lifecycle as lifecycle

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def generate_reservation_code(today: date = None) -> str:
    today = today or date.today()
    return f"RES-{today:%Y%m%d}-{uuid.uuid4().hex[:6].upper()}"


def _reservation_options():
    return (
        joinedload(Reservation.guest),
        joinedload(Reservation.hotel),
        selectinload(Reservation.rooms).joinedload(ReservationRoom.room).joinedload(Room.room_type),
    )


def serialize_reservation(reservation: Reservation, detail: bool = False) -> dict:
    total = to_decimal(reservation.total_amount)
    paid = to_decimal(reservation.paid_amount)
    data = {
        "id": reservation.id,
        "code": reservation.code,
        "hotel_id": reservation.hotel_id,
        "guest_id": reservation.guest_id,
        "status": reservation.status,
        "check_in_date": reservation.check_in_date,
        "check_out_date": reservation.check_out_date,
        "actual_check_in": reservation.actual_check_in,
        "actual_check_out": reservation.actual_check_out,
        "adults": reservation.adults,
        "children": reservation.children,
        "nights": reservation.nights,
        "total_amount": float(total),
        "paid_amount": float(paid),
        "balance": float(total - paid),
        "notes": reservation.notes,
        "special_requests": reservation.special_requests,
        "guest": reservation.guest,
        "hotel": reservation.hotel,
        "rooms": [
            {
                "id": rr.id,
                "room_id": rr.room_id,
                "room_number": rr.room.number,
                "room_type": rr.room.room_type.name,
                "daily_rate": float(rr.daily_rate),
            }
            for rr in reservation.rooms
        ],
        "created_at": reservation.created_at,
        "updated_at": reservation.updated_at,
    }
    if detail:
        data["charges"] = [ChargeOut.model_validate(c) for c in reservation.charges]
        data["transactions"] = [PaymentRef.model_validate(t) for t in reservation.transactions]
    return data


def get_reservation_or_404(db: Session, current_user: UserToken, reservation_id: UUID) -> Reservation:
    reservation = (
        db.query(Reservation)
        .options(*_reservation_options())
        .filter(Reservation.id == reservation_id)
        .first()
    )
    if not reservation:
        return not_found("Reservation")
    if not can_access_hotel(current_user, reservation.hotel_id):
        return forbidden()
    return reservation


# ----------------- Build Filters -----------------
def build_reservation_filters(current_user: UserToken, params: ReservationRequest):
    filters = hotel_scope_filters(Reservation.hotel_id, current_user, params.hotel_id)

    if params.status and params.status.lower() != "all":
        filters.append(Reservation.status == params.status.upper())

    if params.guest_id:
        filters.append(Reservation.guest_id == params.guest_id)

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(
            or_(
                Reservation.code.ilike(search_term),
                Guest.first_name.ilike(search_term),
                Guest.last_name.ilike(search_term),
                Guest.document.ilike(search_term),
            )
        )
    return filters


# ----------------- Get All Reservations -----------------
def get_reservations(db: Session, current_user: UserToken, params: ReservationRequest):
    filters = build_reservation_filters(current_user, params)
    base_query = db.query(Reservation).join(Guest, Guest.id == Reservation.guest_id).filter(*filters)
    total = base_query.with_entities(func.count(Reservation.id)).scalar()

    reservations = (
        base_query
        .options(*_reservation_options())
        .order_by(Reservation.created_at.desc(), Reservation.code.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {
        "reservations": [serialize_reservation(r) for r in reservations],
        "total": total,
    }


# ----------------- Get Single Reservation -----------------
def get_reservation(db: Session, current_user: UserToken, reservation_id: UUID):
    reservation = get_reservation_or_404(db, current_user, reservation_id)
    return serialize_reservation(reservation, detail=True)


# ----------------- Create Reservation -----------------
def create_reservation(db: Session, current_user: UserToken, data: ReservationCreate):
    hotel_id = resolve_target_hotel(current_user, data.hotel_id)

    guest = db.query(Guest).filter(Guest.id == data.guest_id).first()
    if not guest:
        return not_found("Guest")

    rooms = lifecycle.lock_rooms(db, data.room_ids)
    bookable = [r for r in rooms if r.hotel_id == hotel_id and r.is_active]
    if len(bookable) != len(data.room_ids):
        return error_response(
            message="One or more rooms are not available",
            status_code=str(AppStatusCode.ROOMS_UNAVAILABLE),
            http_status=400
        )

    lifecycle.ensure_no_conflicts(db, data.room_ids, data.check_in_date, data.check_out_date)

    nights = (data.check_out_date - data.check_in_date).days
    reservation = Reservation(
        code=generate_reservation_code(),
        hotel_id=hotel_id,
        guest_id=guest.id,
        created_by_id=current_user.user_id,
        status=ReservationStatus.PENDING.value,
        check_in_date=data.check_in_date,
        check_out_date=data.check_out_date,
        adults=data.adults,
        children=data.children,
        notes=data.notes,
        special_requests=data.special_requests,
        paid_amount=ZERO,
    )

    total = ZERO
    for room in bookable:
        rate = to_decimal(room.room_type.base_rate)
        reservation.rooms.append(ReservationRoom(room_id=room.id, daily_rate=rate))
        total += rate * nights
    reservation.total_amount = total

    db.add(reservation)
    db.commit()
    logger.info("Reservation %s created for %s night(s), total %s", reservation.code, nights, total)
    return get_reservation(db, current_user, reservation.id)


# ----------------- Update Reservation -----------------
def update_reservation(db: Session, current_user: UserToken, reservation_id: UUID, data: ReservationUpdate):
    reservation = get_reservation_or_404(db, current_user, reservation_id)

    if ReservationStatus(reservation.status) in lifecycle.EDIT_LOCKED_STATUSES:
        return error_response(
            message=f"Cannot edit a reservation with status {reservation.status}",
            status_code=str(AppStatusCode.OPERATION_ERROR),
            http_status=400
        )

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    check_in = update_data.pop("check_in_date", reservation.check_in_date)
    check_out = update_data.pop("check_out_date", reservation.check_out_date)

    if check_in >= check_out:
        return error_response(
            message="Check-out date must be after check-in date",
            status_code=str(AppStatusCode.INVALID_INPUT),
            http_status=400
        )

    if check_in != reservation.check_in_date or check_out != reservation.check_out_date:
        room_ids = [rr.room_id for rr in reservation.rooms]
        lifecycle.lock_rooms(db, room_ids)
        lifecycle.ensure_no_conflicts(db, room_ids, check_in, check_out, exclude_id=reservation.id)

        # booked rates, never the current room type rate
        nights = (check_out - check_in).days
        room_total = sum((to_decimal(rr.daily_rate) * nights for rr in reservation.rooms), ZERO)
        charges_total = sum((to_decimal(c.amount) * c.quantity for c in reservation.charges), ZERO)

        reservation.check_in_date = check_in
        reservation.check_out_date = check_out
        reservation.total_amount = room_total + charges_total

    for key, value in update_data.items():
        setattr(reservation, key, value)

    db.commit()
    return get_reservation(db, current_user, reservation.id)


# ----------------- Change Status -----------------
def update_reservation_status(db: Session, current_user: UserToken, reservation_id: UUID,
                              data: ReservationStatusUpdate):
    reservation = get_reservation_or_404(db, current_user, reservation_id)
    lifecycle.apply_transition(db, reservation, data.status)
    db.commit()
    return get_reservation(db, current_user, reservation.id)


# ----------------- Delete Reservation -----------------
def delete_reservation(db: Session, current_user: UserToken, reservation_id: UUID):
    reservation = get_reservation_or_404(db, current_user, reservation_id)

    lifecycle.release_rooms(db, reservation)

    # ledger history outlives the booking
    db.query(Transaction).filter(
        Transaction.reservation_id == reservation.id
    ).update({Transaction.reservation_id: None}, synchronize_session=False)

    code = reservation.code
    db.delete(reservation)
    db.commit()
    logger.info("Reservation %s deleted", code)
    return {"message": "Reservation deleted successfully"}


# ----------------- Charges -----------------
def get_charges(db: Session, current_user: UserToken, reservation_id: UUID):
    reservation = get_reservation_or_404(db, current_user, reservation_id)
    return [ChargeOut.model_validate(c) for c in reservation.charges]


def add_charge(db: Session, current_user: UserToken, reservation_id: UUID, data: ChargeCreate):
    reservation = get_reservation_or_404(db, current_user, reservation_id)

    if ReservationStatus(reservation.status) in lifecycle.CHARGE_LOCKED_STATUSES:
        return error_response(
            message=f"Cannot add charges to a reservation with status {reservation.status}",
            status_code=str(AppStatusCode.OPERATION_ERROR),
            http_status=400
        )

    amount = to_decimal(data.amount)
    charge = Charge(
        reservation_id=reservation.id,
        description=data.description,
        category=data.category.value,
        amount=amount,
        quantity=data.quantity,
    )
    db.add(charge)
    db.query(Reservation).filter(Reservation.id == reservation.id).update(
        {Reservation.total_amount: Reservation.total_amount + amount * data.quantity},
        synchronize_session=False
    )
    db.commit()
    db.refresh(charge)
    return ChargeOut.model_validate(charge)


# ----------------- Statement -----------------
def statement_payment_status(balance: Decimal, total_payments: Decimal) -> str:
    if balance <= 0:
        return PaymentStatus.PAID.value
    if total_payments > 0:
        return PaymentStatus.PARTIAL.value
    return PaymentStatus.PENDING.value


def get_statement(db: Session, current_user: UserToken, reservation_id: UUID):
    reservation = get_reservation_or_404(db, current_user, reservation_id)
    nights = reservation.nights

    room_charges = []
    subtotal = ZERO
    for rr in sorted(reservation.rooms, key=lambda r: r.room.number):
        rate = to_decimal(rr.daily_rate)
        room_total = rate * nights
        subtotal += room_total
        room_charges.append({
            "room_number": rr.room.number,
            "room_type": rr.room.room_type.name,
            "daily_rate": float(rate),
            "nights": nights,
            "total": float(room_total),
            "daily_breakdown": [
                {"day": reservation.check_in_date + timedelta(days=i), "amount": float(rate)}
                for i in range(nights)
            ],
        })

    groups = defaultdict(list)
    for charge in reservation.charges:
        groups[charge.category].append(charge)

    additional = ZERO
    additional_charges = []
    for category in sorted(groups):
        items = groups[category]
        group_total = sum((to_decimal(c.amount) * c.quantity for c in items), ZERO)
        additional += group_total
        additional_charges.append({
            "category": category,
            "total": float(group_total),
            "items": [ChargeOut.model_validate(c) for c in items],
        })

    total_payments = ZERO
    total_refunds = ZERO
    for txn in reservation.transactions:
        if txn.type == TransactionType.PAYMENT.value:
            total_payments += to_decimal(txn.amount)
        elif txn.type == TransactionType.REFUND.value:
            total_refunds += to_decimal(txn.amount)

    total_charges = subtotal + additional
    balance = total_charges - total_payments + total_refunds
    guest = reservation.guest
    hotel = reservation.hotel

    return {
        "hotel": {
            "name": hotel.name,
            "code": hotel.code,
            "address": hotel.address,
            "city": hotel.city,
            "state": hotel.state,
            "phone": hotel.phone,
            "email": hotel.email,
        },
        "guest": {
            "name": guest.full_name,
            "document": guest.document,
            "document_type": guest.document_type,
            "email": guest.email,
            "phone": guest.phone,
        },
        "stay": {
            "code": reservation.code,
            "status": reservation.status,
            "check_in_date": reservation.check_in_date,
            "check_out_date": reservation.check_out_date,
            "actual_check_in": reservation.actual_check_in,
            "actual_check_out": reservation.actual_check_out,
            "nights": nights,
            "adults": reservation.adults,
            "children": reservation.children,
        },
        "room_charges": room_charges,
        "additional_charges": additional_charges,
        "payments": [PaymentRef.model_validate(t) for t in reservation.transactions],
        "summary": {
            "subtotal": float(subtotal),
            "additional_charges": float(additional),
            "total_charges": float(total_charges),
            "total_payments": float(total_payments),
            "total_refunds": float(total_refunds),
            "balance": float(balance),
            "payment_status": statement_payment_status(balance, total_payments),
        },
    }

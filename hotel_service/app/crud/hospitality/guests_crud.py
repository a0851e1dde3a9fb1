from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, not_found
from shared.utils.app_status_code import AppStatusCode
from ...models.hospitality import Guest, Reservation
from ...schemas.hospitality.guests_schemas import GuestCreate, GuestOut, GuestRequest


def _guest_out(guest: Guest, reservation_count: int) -> GuestOut:
    out = GuestOut.model_validate(guest)
    out.reservation_count = reservation_count
    return out


# ----------------- Build Filters -----------------
def build_guest_filters(params: GuestRequest):
    filters = []
    if params.search:
        search_term = f"%{params.search}%"
        filters.append(
            or_(
                Guest.first_name.ilike(search_term),
                Guest.last_name.ilike(search_term),
                Guest.email.ilike(search_term),
                Guest.phone.ilike(search_term),
                Guest.document.ilike(search_term),
            )
        )
    return filters


# ----------------- Get All Guests -----------------
def get_guests(db: Session, current_user: UserToken, params: GuestRequest):
    # guests are chain-wide, a returning guest is the same person at every hotel
    filters = build_guest_filters(params)
    total = db.query(func.count(Guest.id)).filter(*filters).scalar()

    reservation_count = (
        db.query(Reservation.guest_id, func.count(Reservation.id).label("reservation_count"))
        .group_by(Reservation.guest_id)
        .subquery()
    )

    rows = (
        db.query(Guest, func.coalesce(reservation_count.c.reservation_count, 0))
        .outerjoin(reservation_count, reservation_count.c.guest_id == Guest.id)
        .filter(*filters)
        .order_by(Guest.first_name.asc(), Guest.last_name.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"guests": [_guest_out(g, count) for g, count in rows], "total": total}


# ----------------- Get Single Guest -----------------
def get_guest(db: Session, guest_id: UUID):
    guest = db.query(Guest).filter(Guest.id == guest_id).first()
    if not guest:
        return not_found("Guest")

    count = db.query(func.count(Reservation.id)).filter(Reservation.guest_id == guest.id).scalar() or 0
    return _guest_out(guest, count)


# ----------------- Create Guest -----------------
def create_guest(db: Session, guest: GuestCreate):
    if db.query(Guest.id).filter(Guest.document == guest.document).first():
        return error_response(
            message="A guest with this document number already exists",
            status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
            http_status=400
        )

    db_guest = Guest(**guest.model_dump())
    db_guest.document_type = guest.document_type.value
    db.add(db_guest)
    db.commit()
    db.refresh(db_guest)
    return _guest_out(db_guest, 0)

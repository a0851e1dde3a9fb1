from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.auth import can_access_hotel
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, forbidden, not_found
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ...models.hospitality import Hotel
from ...schemas.hospitality.hotels_schemas import HotelCreate, HotelOut


# ----------------- Get All Hotels -----------------
def get_hotels(db: Session, current_user: UserToken):
    query = db.query(Hotel).filter(Hotel.is_active == True)

    if current_user.role != UserRole.SUPER_ADMIN:
        if not current_user.hotel_id:
            return {"hotels": [], "total": 0}
        query = query.filter(Hotel.id == current_user.hotel_id)

    hotels = query.order_by(Hotel.name.asc()).all()
    return {
        "hotels": [HotelOut.model_validate(h) for h in hotels],
        "total": len(hotels),
    }


# ----------------- Get Single Hotel -----------------
def get_hotel(db: Session, current_user: UserToken, hotel_id: UUID):
    if not can_access_hotel(current_user, hotel_id):
        return forbidden()

    hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
    if not hotel:
        return not_found("Hotel")
    return hotel


# ----------------- Create Hotel -----------------
def create_hotel(db: Session, hotel: HotelCreate):
    code = hotel.code.strip().upper()
    existing = db.query(Hotel).filter(func.upper(Hotel.code) == code).first()
    if existing:
        return error_response(
            message=f"Hotel code '{code}' already exists",
            status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
            http_status=400
        )

    db_hotel = Hotel(**hotel.model_dump(exclude={"code"}), code=code)
    db.add(db_hotel)
    db.commit()
    db.refresh(db_hotel)
    return db_hotel

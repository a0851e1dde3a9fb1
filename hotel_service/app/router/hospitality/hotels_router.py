from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_super_admin, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ...crud.hospitality import hotels_crud as crud
from ...schemas.hospitality.hotels_schemas import HotelCreate, HotelListResponse, HotelOut

router = APIRouter(prefix="/api/hotels", tags=["Hotels"],
                   dependencies=[Depends(validate_current_token)])


# ---------------- List Hotels ----------------
@router.get("", response_model=HotelListResponse)
def get_hotels_endpoint(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_hotels(db, current_user)


# ----------------- Create Hotel -----------------
@router.post("", response_model=HotelOut)
def create_hotel_endpoint(
    hotel: HotelCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_super_admin)
):
    return crud.create_hotel(db, hotel)


# ----------------- Get Hotel -----------------
@router.get("/{hotel_id}", response_model=HotelOut)
def get_hotel_endpoint(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_hotel(db, current_user, hotel_id)

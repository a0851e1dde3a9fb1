from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_role, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.hospitality import reservations_crud as crud
from ...schemas.hospitality.reservations_schemas import (
    ChargeCreate,
    ChargeOut,
    ReservationCreate,
    ReservationDetailOut,
    ReservationListResponse,
    ReservationRequest,
    ReservationStatusUpdate,
    ReservationUpdate,
    StatementOut,
)

router = APIRouter(prefix="/api/reservations", tags=["Reservations"],
                   dependencies=[Depends(validate_current_token)])


# ---------------- List Reservations ----------------
@router.get("", response_model=ReservationListResponse)
def get_reservations_endpoint(
    params: ReservationRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_reservations(db, current_user, params)


# ----------------- Create Reservation -----------------
@router.post("", response_model=ReservationDetailOut)
def create_reservation_endpoint(
    reservation: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.RECEPTIONIST))
):
    return crud.create_reservation(db, current_user, reservation)


@router.get("/{reservation_id}", response_model=ReservationDetailOut)
def get_reservation_endpoint(
    reservation_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_reservation(db, current_user, reservation_id)


# ----------------- Update Reservation -----------------
@router.put("/{reservation_id}", response_model=ReservationDetailOut)
def update_reservation_endpoint(
    reservation_id: UUID,
    reservation: ReservationUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.RECEPTIONIST))
):
    return crud.update_reservation(db, current_user, reservation_id, reservation)


# ----------------- Change Status -----------------
@router.put("/{reservation_id}/status", response_model=ReservationDetailOut)
def update_reservation_status_endpoint(
    reservation_id: UUID,
    status_update: ReservationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.RECEPTIONIST))
):
    return crud.update_reservation_status(db, current_user, reservation_id, status_update)


# ---------------- Delete Reservation ----------------
@router.delete("/{reservation_id}")
def delete_reservation_endpoint(
    reservation_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.MANAGER))
):
    return crud.delete_reservation(db, current_user, reservation_id)


# ---------------- Charges ----------------
@router.get("/{reservation_id}/charges", response_model=List[ChargeOut])
def get_charges_endpoint(
    reservation_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_charges(db, current_user, reservation_id)


@router.post("/{reservation_id}/charges", response_model=ChargeOut)
def add_charge_endpoint(
    reservation_id: UUID,
    charge: ChargeCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.RECEPTIONIST))
):
    return crud.add_charge(db, current_user, reservation_id, charge)


# ---------------- Statement ----------------
@router.get("/{reservation_id}/statement", response_model=StatementOut)
def get_statement_endpoint(
    reservation_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_statement(db, current_user, reservation_id)

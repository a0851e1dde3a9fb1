from datetime import date, datetime
from uuid import UUID
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, model_validator

from shared.core.schemas import CommonQueryParams, HotelRef
from ...enum.hospitality_enum import ChargeCategory, ReservationStatus


class GuestRef(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    document: str

    model_config = {"from_attributes": True}


class ReservationRoomOut(BaseModel):
    id: UUID
    room_id: UUID
    room_number: str
    room_type: str
    daily_rate: float

    model_config = {"from_attributes": True}


# ----------------- Charges -----------------
class ChargeCreate(BaseModel):
    description: str = Field(..., min_length=1)
    category: ChargeCategory = ChargeCategory.OTHER
    amount: float = Field(..., gt=0)
    quantity: int = Field(1, ge=1)


class ChargeOut(BaseModel):
    id: UUID
    reservation_id: UUID
    description: str
    category: ChargeCategory
    amount: float
    quantity: int
    total: float
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PaymentRef(BaseModel):
    id: UUID
    type: str
    amount: float
    payment_method: str
    payment_status: str
    reference: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class ReservationCreate(BaseModel):
    guest_id: UUID
    hotel_id: Optional[UUID] = None
    room_ids: List[UUID] = Field(..., min_length=1)
    check_in_date: date
    check_out_date: date
    adults: int = Field(1, ge=1)
    children: int = Field(0, ge=0)
    notes: Optional[str] = None
    special_requests: Optional[str] = None

    @model_validator(mode="after")
    def check_stay(self):
        if self.check_in_date >= self.check_out_date:
            raise ValueError("Check-out date must be after check-in date")
        if len(set(self.room_ids)) != len(self.room_ids):
            raise ValueError("Room ids must be unique")
        return self


# ----------------- Update -----------------
class ReservationUpdate(BaseModel):
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    adults: Optional[int] = Field(None, ge=1)
    children: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    special_requests: Optional[str] = None


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


# ----------------- Out -----------------
class ReservationOut(BaseModel):
    id: UUID
    code: str
    hotel_id: UUID
    guest_id: UUID
    status: ReservationStatus
    check_in_date: date
    check_out_date: date
    actual_check_in: Optional[datetime] = None
    actual_check_out: Optional[datetime] = None
    adults: int
    children: int
    nights: int
    total_amount: float
    paid_amount: float
    balance: float
    notes: Optional[str] = None
    special_requests: Optional[str] = None
    guest: Optional[GuestRef] = None
    hotel: Optional[HotelRef] = None
    rooms: List[ReservationRoomOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReservationDetailOut(ReservationOut):
    charges: List[ChargeOut] = []
    transactions: List[PaymentRef] = []


# ----------------- Request -----------------
class ReservationRequest(CommonQueryParams):
    hotel_id: Optional[UUID] = None
    status: Optional[str] = None
    guest_id: Optional[UUID] = None


# ----------------- List Response -----------------
class ReservationListResponse(BaseModel):
    reservations: List[ReservationOut]
    total: int


# ----------------- Statement -----------------
class StatementDay(BaseModel):
    day: date
    amount: float


class StatementRoomCharge(BaseModel):
    room_number: str
    room_type: str
    daily_rate: float
    nights: int
    total: float
    daily_breakdown: List[StatementDay]


class StatementChargeGroup(BaseModel):
    category: str
    total: float
    items: List[ChargeOut]


class StatementStay(BaseModel):
    code: str
    status: str
    check_in_date: date
    check_out_date: date
    actual_check_in: Optional[datetime] = None
    actual_check_out: Optional[datetime] = None
    nights: int
    adults: int
    children: int


class StatementSummary(BaseModel):
    subtotal: float
    additional_charges: float
    total_charges: float
    total_payments: float
    total_refunds: float
    balance: float
    payment_status: str


class StatementOut(BaseModel):
    hotel: Dict[str, Optional[str]]
    guest: Dict[str, Optional[str]]
    stay: StatementStay
    room_charges: List[StatementRoomCharge]
    additional_charges: List[StatementChargeGroup]
    payments: List[PaymentRef]
    summary: StatementSummary

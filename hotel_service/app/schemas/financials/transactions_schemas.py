from datetime import datetime
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.core.schemas import CommonQueryParams
from ...enum.revenue_enum import PaymentMethod, PaymentStatus, TransactionType


# ----------------- Create -----------------
class TransactionCreate(BaseModel):
    reservation_id: Optional[UUID] = None
    hotel_id: Optional[UUID] = None
    type: TransactionType
    amount: float = Field(..., gt=0)
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.PAID
    reference: Optional[str] = None
    description: Optional[str] = None


# ----------------- Out -----------------
class TransactionOut(BaseModel):
    id: UUID
    hotel_id: UUID
    reservation_id: Optional[UUID] = None
    reservation_code: Optional[str] = None
    processed_by_id: Optional[UUID] = None
    processed_by_name: Optional[str] = None
    type: TransactionType
    amount: float
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    reference: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ----------------- Request -----------------
class TransactionRequest(CommonQueryParams):
    hotel_id: Optional[UUID] = None
    type: Optional[str] = None
    reservation_id: Optional[UUID] = None


# ----------------- List Response -----------------
class TransactionListResponse(BaseModel):
    transactions: List[TransactionOut]
    total: int

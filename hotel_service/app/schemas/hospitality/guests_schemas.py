from datetime import date, datetime
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

from shared.core.schemas import CommonQueryParams
from ...enum.hospitality_enum import DocumentType


# ----------------- Base -----------------
class GuestBase(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: str = Field(..., min_length=1)
    document: str = Field(..., min_length=1)
    document_type: DocumentType = DocumentType.CPF
    nationality: Optional[str] = "Brazilian"
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = "Brazil"
    birth_date: Optional[date] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class GuestCreate(GuestBase):
    pass


# ----------------- Out -----------------
class GuestOut(GuestBase):
    id: UUID
    email: Optional[str] = None
    reservation_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- Request -----------------
class GuestRequest(CommonQueryParams):
    pass


# ----------------- List Response -----------------
class GuestListResponse(BaseModel):
    guests: List[GuestOut]
    total: int

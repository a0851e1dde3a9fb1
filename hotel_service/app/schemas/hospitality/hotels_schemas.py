from datetime import datetime
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field


# ----------------- Base -----------------
class HotelBase(BaseModel):
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1, max_length=32)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = "Brazil"
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class HotelCreate(HotelBase):
    pass


# ----------------- Out -----------------
class HotelOut(HotelBase):
    id: UUID
    email: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- List Response -----------------
class HotelListResponse(BaseModel):
    hotels: List[HotelOut]
    total: int

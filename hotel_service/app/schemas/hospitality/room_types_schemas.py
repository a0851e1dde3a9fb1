from datetime import datetime
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.core.schemas import CommonQueryParams


# ----------------- Base -----------------
class RoomTypeBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    base_rate: float = Field(..., gt=0)
    max_occupancy: int = Field(2, ge=1)
    amenities: List[str] = []

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class RoomTypeCreate(RoomTypeBase):
    hotel_id: Optional[UUID] = None


# ----------------- Update -----------------
class RoomTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    base_rate: Optional[float] = Field(None, gt=0)
    max_occupancy: Optional[int] = Field(None, ge=1)
    amenities: Optional[List[str]] = None


# ----------------- Out -----------------
class RoomTypeOut(RoomTypeBase):
    id: UUID
    hotel_id: UUID
    room_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- Request -----------------
class RoomTypeRequest(CommonQueryParams):
    hotel_id: Optional[UUID] = None


# ----------------- List Response -----------------
class RoomTypeListResponse(BaseModel):
    room_types: List[RoomTypeOut]
    total: int

from datetime import datetime
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.core.schemas import CommonQueryParams
from ...enum.hospitality_enum import RoomStatus


class RoomTypeRef(BaseModel):
    id: UUID
    name: str
    base_rate: float
    max_occupancy: int

    model_config = {"from_attributes": True}


# ----------------- Base -----------------
class RoomBase(BaseModel):
    number: str = Field(..., min_length=1, max_length=16)
    floor: int = 1
    room_type_id: UUID
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


# ----------------- Create -----------------
class RoomCreate(RoomBase):
    hotel_id: Optional[UUID] = None
    status: RoomStatus = RoomStatus.AVAILABLE


# ----------------- Update -----------------
class RoomUpdate(BaseModel):
    number: Optional[str] = Field(None, min_length=1, max_length=16)
    floor: Optional[int] = None
    room_type_id: Optional[UUID] = None
    status: Optional[RoomStatus] = None
    notes: Optional[str] = None


# ----------------- Out -----------------
class RoomOut(RoomBase):
    id: UUID
    hotel_id: UUID
    status: RoomStatus
    is_active: bool
    room_type: Optional[RoomTypeRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----------------- Request -----------------
class RoomRequest(CommonQueryParams):
    hotel_id: Optional[UUID] = None
    status: Optional[str] = None
    floor: Optional[int] = None
    room_type_id: Optional[UUID] = None


# ----------------- List Response -----------------
class RoomListResponse(BaseModel):
    rooms: List[RoomOut]
    total: int


# ------------ overview ------------------
class RoomOverview(BaseModel):
    totalRooms: int
    available: int
    reserved: int
    occupied: int
    cleaning: int
    maintenance: int

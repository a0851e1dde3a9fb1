from datetime import date, datetime
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel


class RoomStatusCounts(BaseModel):
    AVAILABLE: int = 0
    RESERVED: int = 0
    OCCUPIED: int = 0
    CLEANING: int = 0
    MAINTENANCE: int = 0


class RecentReservation(BaseModel):
    id: UUID
    code: str
    guest_name: str
    rooms: str
    status: str
    check_in_date: date
    check_out_date: date
    total_amount: float
    created_at: Optional[datetime] = None


class DashboardStatsResponse(BaseModel):
    total_rooms: int
    occupied_rooms: int
    occupancy_rate: int
    today_check_ins: int
    today_check_outs: int
    pending_reservations: int
    monthly_revenue: float
    total_revenue: float
    room_status: RoomStatusCounts
    recent_reservations: List[RecentReservation]


class HotelPerformance(BaseModel):
    id: UUID
    name: str
    code: str
    city: Optional[str] = None
    total_rooms: int
    occupied_rooms: int
    occupancy_rate: int
    monthly_revenue: float
    monthly_reservations: int
    checked_in: int


class ChainTotals(BaseModel):
    hotels: int
    total_rooms: int
    occupied_rooms: int
    monthly_revenue: float
    monthly_reservations: int
    checked_in: int
    average_occupancy: int


class ChainOverviewResponse(BaseModel):
    hotels: List[HotelPerformance]
    totals: ChainTotals

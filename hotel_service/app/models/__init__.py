# Import all models to ensure they are registered with SQLAlchemy
from shared.models.users import Users
from .hospitality import Hotel, RoomType, Room, Guest, Reservation, ReservationRoom, Charge
from .financials.transactions import Transaction
from .overview.reports import Report

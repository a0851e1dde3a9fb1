from shared.models.hotels import Hotel
from .room_types import RoomType
from .rooms import Room
from .guests import Guest
from .reservations import Reservation
from .reservation_rooms import ReservationRoom
from .charges import Charge

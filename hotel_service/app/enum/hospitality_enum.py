from enum import Enum


class RoomStatus(str, Enum):

    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    OCCUPIED = "OCCUPIED"
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"


class ReservationStatus(str, Enum):

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class ChargeCategory(str, Enum):

    ROOM_SERVICE = "ROOM_SERVICE"
    MINIBAR = "MINIBAR"
    RESTAURANT = "RESTAURANT"
    LAUNDRY = "LAUNDRY"
    SPA = "SPA"
    PARKING = "PARKING"
    SERVICE_FEE = "SERVICE_FEE"
    DAMAGE = "DAMAGE"
    OTHER = "OTHER"


class DocumentType(str, Enum):

    CPF = "CPF"
    RG = "RG"
    PASSPORT = "PASSPORT"
    OTHER = "OTHER"

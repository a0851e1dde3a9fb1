from enum import Enum


class UserRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    HOTEL_ADMIN = "HOTEL_ADMIN"
    MANAGER = "MANAGER"
    RECEPTIONIST = "RECEPTIONIST"
    STAFF = "STAFF"


ROLE_HIERARCHY = {
    UserRole.SUPER_ADMIN: 5,
    UserRole.HOTEL_ADMIN: 4,
    UserRole.MANAGER: 3,
    UserRole.RECEPTIONIST: 2,
    UserRole.STAFF: 1,
}

ADMIN_ROLES = {UserRole.SUPER_ADMIN, UserRole.HOTEL_ADMIN}

import os

# the apps build their engine at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from auth_service.app.main import app as auth_app
from hotel_service.app.main import app as hotel_app
from hotel_service.app.models.hospitality import Guest, Room, RoomType
from shared.core.auth import create_access_token, token_payload
from shared.core.database import Base, SessionLocal, engine
from shared.models.hotels import Hotel
from shared.models.users import Users
from shared.utils.enums import UserRole


def data(response):
    """Unwrap the JSON envelope."""
    return response.json()["data"]


def headers_for(user: Users) -> dict:
    return {"Authorization": f"Bearer {create_access_token(token_payload(user))}"}


# ============================================================================
# DATABASE / CLIENTS
# ============================================================================

@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    return TestClient(hotel_app)


@pytest.fixture
def auth_client():
    return TestClient(auth_app)


# ============================================================================
# HOTELS / USERS
# ============================================================================

@pytest.fixture
def make_hotel(db):
    def _make(code="GRD", name="Grand Hotel", city="Sao Paulo"):
        hotel = Hotel(name=name, code=code, city=city)
        db.add(hotel)
        db.commit()
        db.refresh(hotel)
        return hotel
    return _make


@pytest.fixture
def hotel(make_hotel):
    return make_hotel()


@pytest.fixture
def other_hotel(make_hotel):
    return make_hotel(code="BCH", name="Beach Resort", city="Rio de Janeiro")


@pytest.fixture
def make_user(db):
    def _make(role: UserRole, hotel=None, email=None, active=True, password=None):
        user = Users(
            email=email or f"{role.value.lower()}-{uuid4().hex[:6]}@grandhotel.com.br",
            first_name=role.value.title(),
            last_name="Tester",
            role=role.value,
            hotel_id=hotel.id if hotel else None,
            is_active=active,
        )
        if password:
            user.set_password(password)
        else:
            # hashing is slow, most tests never sign in
            user.password = "unused"
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def users(make_user, hotel):
    return {
        UserRole.SUPER_ADMIN: make_user(UserRole.SUPER_ADMIN),
        UserRole.HOTEL_ADMIN: make_user(UserRole.HOTEL_ADMIN, hotel),
        UserRole.MANAGER: make_user(UserRole.MANAGER, hotel),
        UserRole.RECEPTIONIST: make_user(UserRole.RECEPTIONIST, hotel),
        UserRole.STAFF: make_user(UserRole.STAFF, hotel),
    }


@pytest.fixture
def headers(users):
    return {role: headers_for(user) for role, user in users.items()}


@pytest.fixture
def other_headers(make_user, other_hotel):
    """Headers for staff of the other hotel, by role."""
    return {
        role: headers_for(make_user(role, other_hotel))
        for role in (UserRole.HOTEL_ADMIN, UserRole.MANAGER, UserRole.RECEPTIONIST)
    }


# ============================================================================
# INVENTORY / GUESTS
# ============================================================================

@pytest.fixture
def make_room_type(db):
    def _make(hotel, name="Standard", base_rate=100, max_occupancy=2):
        room_type = RoomType(
            hotel_id=hotel.id, name=name, base_rate=base_rate,
            max_occupancy=max_occupancy, amenities=["wifi", "tv"])
        db.add(room_type)
        db.commit()
        db.refresh(room_type)
        return room_type
    return _make


@pytest.fixture
def room_type(make_room_type, hotel):
    return make_room_type(hotel)


@pytest.fixture
def make_room(db):
    def _make(hotel, room_type, number, floor=1, status="AVAILABLE"):
        room = Room(hotel_id=hotel.id, room_type_id=room_type.id,
                    number=number, floor=floor, status=status)
        db.add(room)
        db.commit()
        db.refresh(room)
        return room
    return _make


@pytest.fixture
def room(make_room, hotel, room_type):
    return make_room(hotel, room_type, "101")


@pytest.fixture
def room_b(make_room, hotel, room_type):
    return make_room(hotel, room_type, "102")


@pytest.fixture
def guest(db):
    guest = Guest(first_name="Maria", last_name="Silva", email="maria@mail.com.br",
                  phone="+55 11 99999-0000", document="123.456.789-00")
    db.add(guest)
    db.commit()
    db.refresh(guest)
    return guest


@pytest.fixture
def room_status(db):
    def _status(room_id):
        db.expire_all()
        return db.query(Room).filter(Room.id == room_id).one().status
    return _status

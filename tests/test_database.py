import threading
import time
from datetime import date

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hotel_service.app.crud.hospitality import reservation_lifecycle as lifecycle
from hotel_service.app.crud.hospitality.reservations_crud import create_reservation
from hotel_service.app.models.hospitality import Guest, Reservation, Room, RoomType
from hotel_service.app.schemas.hospitality.reservations_schemas import ReservationCreate
from shared.core.database import Base, build_engine, engine, get_db
from shared.core.schemas import UserToken
from shared.models.hotels import Hotel
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole


@pytest.fixture
def file_engine(tmp_path):
    db_engine = build_engine(f"sqlite:///{tmp_path / 'chain.db'}")
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def file_session(file_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=file_engine)


@pytest.fixture
def front_desk(file_session):
    """Hotel with room 101, a guest and a receptionist in the file database."""
    session = file_session()
    hotel = Hotel(name="Grand Hotel", code="GRD", city="Sao Paulo")
    session.add(hotel)
    session.flush()
    room_type = RoomType(hotel_id=hotel.id, name="Standard", base_rate=100, max_occupancy=2)
    session.add(room_type)
    session.flush()
    room = Room(hotel_id=hotel.id, room_type_id=room_type.id, number="101", floor=1)
    guest = Guest(first_name="Maria", last_name="Silva", phone="+55 11 99999-0000",
                  document="123.456.789-00")
    clerk = Users(email="desk@grandhotel.com.br", first_name="Receptionist", last_name="Tester",
                  role=UserRole.RECEPTIONIST.value, hotel_id=hotel.id, password="unused")
    session.add_all([room, guest, clerk])
    session.commit()

    desk = {
        "user": UserToken(user_id=clerk.id, email=clerk.email,
                          role=UserRole.RECEPTIONIST, hotel_id=hotel.id),
        "request": ReservationCreate(guest_id=guest.id, room_ids=[room.id],
                                     check_in_date=date(2024, 1, 1),
                                     check_out_date=date(2024, 1, 4)),
    }
    session.close()
    return desk


# ============================================================================
# ENGINE OPTIONS
# ============================================================================

class TestEngineOptions:

    def test_memory_database_shares_one_connection(self):
        assert isinstance(engine.pool, StaticPool)

    def test_file_database_gets_a_connection_per_session(self, file_engine):
        assert not isinstance(file_engine.pool, StaticPool)
        first, second = file_engine.connect(), file_engine.connect()
        try:
            assert first.connection.dbapi_connection is not second.connection.dbapi_connection
        finally:
            first.close()
            second.close()

    def test_rollback_in_one_session_keeps_another_sessions_work(self, file_session):
        writer, bystander = file_session(), file_session()
        writer.add(Hotel(name="Beach Resort", code="BCH", city="Salvador"))
        writer.flush()
        bystander.rollback()
        writer.commit()
        writer.close()
        bystander.close()

        check = file_session()
        assert check.query(Hotel).filter(Hotel.code == "BCH").count() == 1
        check.close()


# ============================================================================
# CONCURRENT BOOKINGS
# ============================================================================

class TestConcurrentBookings:

    def test_only_one_of_two_overlapping_bookings_is_stored(self, file_session, front_desk, monkeypatch):
        checked = threading.Event()
        real_check = lifecycle.ensure_no_conflicts

        def slow_check(*args, **kwargs):
            real_check(*args, **kwargs)
            checked.set()
            # hold the gap between the conflict check and the insert open
            time.sleep(0.3)

        monkeypatch.setattr(lifecycle, "ensure_no_conflicts", slow_check)
        results = {}

        def book(name):
            session = file_session()
            try:
                create_reservation(session, front_desk["user"], front_desk["request"])
                results[name] = "ok"
            except HTTPException as exc:
                results[name] = exc.detail["status_code"]
            finally:
                session.close()

        first = threading.Thread(target=book, args=("first",))
        first.start()
        assert checked.wait(10)
        second = threading.Thread(target=book, args=("second",))
        second.start()
        first.join(30)
        second.join(30)

        assert results == {"first": "ok", "second": AppStatusCode.ROOM_CONFLICT}
        session = file_session()
        assert session.query(Reservation).count() == 1
        session.close()


# ============================================================================
# REQUEST SESSION
# ============================================================================

class TestRequestSession:

    def test_failed_request_rolls_back(self, db):
        sessions = get_db()
        session = next(sessions)
        session.add(Hotel(name="Ghost Inn", code="GHO", city="Recife"))
        session.flush()

        with pytest.raises(RuntimeError):
            sessions.throw(RuntimeError("request failed"))

        assert db.query(Hotel).filter(Hotel.code == "GHO").count() == 0
